"""Traffic counter actor: the single ledger of bytes on the wire."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from erlay_sim.core.actor import Actor
from erlay_sim.core.types import ActorId
from erlay_sim.metrics.results import TrafficData, TrafficSnapshot
from erlay_sim.protocol.messages import Direction, TrafficReport

if TYPE_CHECKING:
    from erlay_sim.core.events import EventPayload
    from erlay_sim.core.simulator import Simulator

logger = logging.getLogger(__name__)

TRAFFIC_COUNTER_ID = ActorId("traffic-counter")


class TrafficCounter(Actor):
    """Accumulates TrafficReports from every peer.

    Reports arrive through the counter's inbox, one at a time, so the ledger
    needs no locking. Only this actor writes the ledger.
    """

    def __init__(self, simulator: Simulator, actor_id: ActorId = TRAFFIC_COUNTER_ID) -> None:
        super().__init__(actor_id, simulator)
        self._bytes_sent: dict[ActorId, int] = defaultdict(int)
        self._bytes_received: dict[ActorId, int] = defaultdict(int)
        self._reports: int = 0

    @property
    def reports_processed(self) -> int:
        return self._reports

    def on_event(self, payload: EventPayload) -> None:
        match payload:
            case TrafficReport() as report:
                self._record(report)
            case _:
                logger.debug("Traffic counter ignoring %s", type(payload).__name__)

    def _record(self, report: TrafficReport) -> None:
        if report.num_bytes < 0:
            raise ValueError(f"Negative traffic report from {report.peer_id}: {report.num_bytes}")

        if report.direction is Direction.SENT:
            self._bytes_sent[report.peer_id] += report.num_bytes
        else:
            self._bytes_received[report.peer_id] += report.num_bytes
        self._reports += 1

    def snapshot(self) -> TrafficSnapshot:
        """Read the final ledger. Only valid once the run is quiescent."""
        if not self._simulator.is_quiescent():
            raise RuntimeError("Traffic snapshot requested before the run became quiescent")

        peer_ids = self._bytes_sent.keys() | self._bytes_received.keys()
        peer_ids |= {peer.id for peer in self._simulator.peers}
        return TrafficSnapshot(
            per_peer={
                peer_id: TrafficData(
                    bytes_sent=self._bytes_sent.get(peer_id, 0),
                    bytes_received=self._bytes_received.get(peer_id, 0),
                )
                for peer_id in peer_ids
            }
        )
