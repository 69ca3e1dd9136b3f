"""Simulation scenario runners."""

from .propagation import (
    PropagationResult,
    RelayComparison,
    compare_relay_modes,
    run_propagation_scenario,
)

__all__ = [
    "PropagationResult",
    "RelayComparison",
    "compare_relay_modes",
    "run_propagation_scenario",
]
