"""Errors raised while building or running a simulation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from erlay_sim.core.types import ActorId, ShortId


class SimulationError(Exception):
    """Base class for all simulator errors."""


class ConnectionRefused(SimulationError):
    """Attempted to open a link into a peer that does not accept inbound links."""

    def __init__(self, source: ActorId, target: ActorId) -> None:
        self.source = source
        self.target = target
        super().__init__(f"{target} refused inbound connection from {source}")


class UnknownTransactionRequested(SimulationError):
    """A GetData named a transaction the responder does not hold.

    Never raised out of the event loop: the responder logs it and drops the
    request.
    """

    def __init__(self, peer_id: ActorId, requester: ActorId, short_id: ShortId) -> None:
        self.peer_id = peer_id
        self.requester = requester
        self.short_id = short_id
        super().__init__(f"{requester} requested unknown transaction {short_id:016x} from {peer_id}")


class MalformedTopology(SimulationError):
    """The configured network cannot be built."""


class SimulationStalled(SimulationError):
    """The run reached its time bound without becoming quiescent."""

    def __init__(self, current_time: float, pending: int) -> None:
        self.current_time = current_time
        self.pending = pending
        super().__init__(
            f"Simulation not quiescent at t={current_time:.3f}s ({pending} events pending)"
        )
