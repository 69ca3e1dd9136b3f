"""Discrete event simulator comparing transaction flooding with set reconciliation."""

from erlay_sim.config import RelayMode, SimulationConfig
from erlay_sim.errors import (
    ConnectionRefused,
    MalformedTopology,
    SimulationError,
    SimulationStalled,
    UnknownTransactionRequested,
)

__all__ = [
    "ConnectionRefused",
    "MalformedTopology",
    "RelayMode",
    "SimulationConfig",
    "SimulationError",
    "SimulationStalled",
    "UnknownTransactionRequested",
]
