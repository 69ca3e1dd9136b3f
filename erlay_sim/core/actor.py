"""Actor base class shared by peers and the traffic counter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from erlay_sim.core.events import Command, Event, EventPayload, Message, Timer

if TYPE_CHECKING:
    from erlay_sim.core.simulator import Simulator
    from erlay_sim.core.types import ActorId

__all__ = ["Actor", "Command", "Event", "EventPayload", "Message", "Timer"]


class Actor(ABC):
    """A peer or service registered in the simulator's arena.

    The simulator feeds each actor its inbox one event at a time through
    on_event. Peers reach each other only through the Network and report
    their own bytes to the traffic counter by local delivery.
    """

    def __init__(self, actor_id: ActorId, simulator: Simulator) -> None:
        self._id = actor_id
        self._simulator = simulator

    @property
    def id(self) -> ActorId:
        return self._id

    @property
    def simulator(self) -> Simulator:
        return self._simulator

    @abstractmethod
    def on_event(self, payload: EventPayload) -> None:
        """Handle one message or command from this actor's inbox."""
        ...

    def send(self, msg: Message, to: ActorId) -> None:
        """Put a message on the link to another peer."""
        self._simulator.network.deliver(msg, self._id, to)

    def schedule_command(self, delay: float, command: Command) -> None:
        """Queue a command for this actor, e.g. the next reconciliation round."""
        self._simulator.schedule(
            Event(
                timestamp=self._simulator.current_time + delay,
                priority=1,  # messages arriving at the same instant go first
                target_id=self._id,
                payload=command,
            )
        )
