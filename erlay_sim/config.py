"""Simulation configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class RelayMode(Enum):
    FLOOD = auto()  # Inv -> GetData -> Tx to every neighbor
    RECONCILE = auto()  # Periodic set reconciliation per outbound link


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for a transaction relay simulation."""

    # Network topology
    num_private: int = 8
    num_public: int = 2

    # Relay protocol
    relay_mode: RelayMode = RelayMode.RECONCILE
    reconcile_interval: float = 2.0  # seconds between rounds on each outbound link

    # Wire
    link_latency: float = 0.05  # one-way delay in seconds

    # Simulation parameters
    seed: int = 42
    max_time: float = 3600.0  # give up if not quiescent by then

    def __post_init__(self) -> None:
        if self.reconcile_interval <= 0:
            raise ValueError(f"reconcile_interval must be positive, got {self.reconcile_interval}")
        if self.link_latency < 0:
            raise ValueError(f"link_latency must be non-negative, got {self.link_latency}")
        if self.max_time <= 0:
            raise ValueError(f"max_time must be positive, got {self.max_time}")

    @property
    def use_reconciliation(self) -> bool:
        return self.relay_mode is RelayMode.RECONCILE
