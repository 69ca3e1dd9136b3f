"""Traffic snapshot data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..core.types import ActorId


@dataclass(frozen=True)
class TrafficData:
    """Cumulative bytes for one peer."""

    bytes_sent: int = 0
    bytes_received: int = 0

    @property
    def total(self) -> int:
        return self.bytes_sent + self.bytes_received


@dataclass(frozen=True)
class TrafficSnapshot:
    """Read-only view of the traffic ledger after the run."""

    per_peer: Mapping[ActorId, TrafficData] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "per_peer", MappingProxyType(dict(self.per_peer)))

    @property
    def total_sent(self) -> int:
        return sum(data.bytes_sent for data in self.per_peer.values())

    @property
    def total_received(self) -> int:
        return sum(data.bytes_received for data in self.per_peer.values())

    @property
    def total_traffic(self) -> int:
        """Sent plus received over all peers, so each wire byte counts twice."""
        return self.total_sent + self.total_received

    def __getitem__(self, peer_id: ActorId) -> TrafficData:
        return self.per_peer.get(peer_id, TrafficData())

    def format_report(self) -> list[str]:
        lines = [
            f"{peer_id}: {data.bytes_sent}↑ {data.bytes_received}↓ (bytes)"
            for peer_id, data in sorted(self.per_peer.items())
        ]
        lines.append(f"Total traffic: {self.total_traffic} bytes")
        return lines

    def to_dict(self) -> dict[str, object]:
        return {
            "total_sent": self.total_sent,
            "total_received": self.total_received,
            "total_traffic": self.total_traffic,
            "per_peer": {
                peer_id: {"bytes_sent": data.bytes_sent, "bytes_received": data.bytes_received}
                for peer_id, data in self.per_peer.items()
            },
        }
