"""Propagation scenario: every private peer originates one transaction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from erlay_sim.config import RelayMode, SimulationConfig
from erlay_sim.core.simulator import Simulator
from erlay_sim.core.topology import Role

if TYPE_CHECKING:
    from erlay_sim.core.types import ShortId
    from erlay_sim.metrics.results import TrafficSnapshot

logger = logging.getLogger(__name__)

# Private peer counts swept against a fixed number of public peers
SWEEP_PRIVATE_COUNTS = (1, 21, 41, 61, 81, 101, 121, 141, 161, 181, 200)


@dataclass
class PropagationResult:
    """Outcome of a single run."""

    simulator: Simulator
    traffic: TrafficSnapshot
    transactions: list[ShortId]

    @property
    def fully_propagated(self) -> bool:
        return all(
            all(peer.knows(short_id) for short_id in self.transactions)
            for peer in self.simulator.peers
        )


@dataclass
class RelayComparison:
    """Flooding and reconciliation over the same topology and transactions."""

    flood: PropagationResult
    reconcile: PropagationResult

    @property
    def reduction(self) -> float:
        """Fraction of flood traffic saved by reconciliation."""
        flood_total = self.flood.traffic.total_traffic
        if flood_total == 0:
            return 0.0
        return 1 - self.reconcile.traffic.total_traffic / flood_total


def run_propagation_scenario(config: SimulationConfig | None = None) -> PropagationResult:
    """Build the network, announce one transaction per private peer, run to quiescence."""
    if config is None:
        config = SimulationConfig()

    sim = Simulator.build(config)

    transactions = [
        sim.announce_transaction(peer) for peer in sim.peers if peer.role is Role.PRIVATE
    ]
    logger.info("Announced %d transactions", len(transactions))

    sim.run_until_quiescent()

    return PropagationResult(
        simulator=sim,
        traffic=sim.traffic.snapshot(),
        transactions=transactions,
    )


def compare_relay_modes(config: SimulationConfig | None = None) -> RelayComparison:
    """Run the same seeded scenario once per relay mode."""
    if config is None:
        config = SimulationConfig()

    return RelayComparison(
        flood=run_propagation_scenario(replace(config, relay_mode=RelayMode.FLOOD)),
        reconcile=run_propagation_scenario(replace(config, relay_mode=RelayMode.RECONCILE)),
    )


def main(argv: list[str] | None = None) -> None:
    """Run a propagation scenario and print the traffic report."""
    import argparse
    import json

    parser = argparse.ArgumentParser(
        description="Compare transaction flooding with set reconciliation"
    )
    parser.add_argument(
        "--numprivate",
        type=int,
        default=8,
        help="Number of private peers (default: 8)",
    )
    parser.add_argument(
        "--numpublic",
        type=int,
        default=2,
        help="Number of public peers (default: 2)",
    )
    parser.add_argument(
        "-r",
        "--reconcile",
        action="store_true",
        help="Relay by set reconciliation instead of flooding",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=2.0,
        help="Seconds between reconciliation rounds (default: 2.0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for transaction generation (default: 42)",
    )
    parser.add_argument(
        "--sweep",
        action="store_true",
        help="Sweep private peer counts and print flood/reconcile totals",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the traffic snapshot as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig(
        num_private=args.numprivate,
        num_public=args.numpublic,
        relay_mode=RelayMode.RECONCILE if args.reconcile else RelayMode.FLOOD,
        reconcile_interval=args.interval,
        seed=args.seed,
    )

    if args.sweep:
        for num_private in SWEEP_PRIVATE_COUNTS:
            comparison = compare_relay_modes(replace(config, num_private=num_private))
            print(
                f"{num_private} {comparison.flood.traffic.total_traffic} "
                f"{comparison.reconcile.traffic.total_traffic}"
            )
        return

    result = run_propagation_scenario(config)

    if args.json:
        print(json.dumps(result.traffic.to_dict(), indent=2))
        return

    for line in result.traffic.format_report():
        print(line)


if __name__ == "__main__":
    main()
