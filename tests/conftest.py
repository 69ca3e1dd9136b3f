"""Shared pytest fixtures for relay simulator tests."""

import pytest

from erlay_sim.config import RelayMode, SimulationConfig
from erlay_sim.core.network import Network
from erlay_sim.core.simulator import Simulator
from erlay_sim.metrics.traffic import TrafficCounter


@pytest.fixture
def simulator() -> Simulator:
    """Create a fresh simulator with default seed."""
    return Simulator(seed=42)


@pytest.fixture
def traffic(simulator: Simulator) -> TrafficCounter:
    """Create and register the traffic counter."""
    counter = TrafficCounter(simulator=simulator)
    simulator.register_actor(counter)
    simulator._traffic = counter
    return counter


@pytest.fixture
def network(simulator: Simulator, traffic: TrafficCounter) -> Network:
    """Create a network and attach it to the simulator."""
    net = Network(simulator, latency=0.05)
    simulator._network = net
    return net


@pytest.fixture
def flood_config() -> SimulationConfig:
    return SimulationConfig(relay_mode=RelayMode.FLOOD)


@pytest.fixture
def reconcile_config() -> SimulationConfig:
    return SimulationConfig(relay_mode=RelayMode.RECONCILE, reconcile_interval=2.0)
