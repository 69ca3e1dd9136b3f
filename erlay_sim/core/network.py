"""In-process wire between actors with a fixed one-way latency."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from erlay_sim.core.events import Event

if TYPE_CHECKING:
    from erlay_sim.core.actor import Message
    from erlay_sim.core.simulator import Simulator
    from erlay_sim.core.types import ActorId

logger = logging.getLogger(__name__)


class Network:
    """Network component that schedules message delivery between actors.

    Every message on every link takes the same one-way latency, so the
    simulator's insertion-order tiebreak keeps each directed link FIFO. There
    is no loss, no jitter and no congestion: bandwidth is measured, not modeled.
    """

    def __init__(self, simulator: Simulator, latency: float = 0.05) -> None:
        if latency < 0:
            raise ValueError(f"Link latency must be non-negative, got {latency}")
        self._simulator = simulator
        self._latency = latency

        # Statistics
        self._messages_delivered: int = 0
        self._total_bytes: int = 0

    @property
    def latency(self) -> float:
        return self._latency

    def deliver(self, msg: Message, from_: ActorId, to: ActorId) -> None:
        """Schedule message delivery after the link latency."""
        self._simulator.schedule(
            Event(
                timestamp=self._simulator.current_time + self._latency,
                priority=0,
                target_id=to,
                payload=msg,
            )
        )

        self._messages_delivered += 1
        self._total_bytes += msg.size_bytes
        logger.debug("%s -> %s: %s (%d bytes)", from_, to, type(msg).__name__, msg.size_bytes)

    @property
    def messages_delivered(self) -> int:
        return self._messages_delivered

    @property
    def total_bytes(self) -> int:
        return self._total_bytes
