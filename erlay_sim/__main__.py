from erlay_sim.scenarios.propagation import main

main()
