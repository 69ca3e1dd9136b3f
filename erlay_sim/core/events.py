"""Base classes for events and commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from erlay_sim.core.types import ActorId


@dataclass
class Message:
    """Base class for all protocol messages exchanged between actors."""

    sender: ActorId

    @property
    def size_bytes(self) -> int:
        """Size of the message in bytes for bandwidth accounting."""
        return 0


@dataclass
class Command:
    """Base class for all local commands.

    Commands differ from Messages:
    - Commands are local events (timers, internal triggers)
    - Messages are protocol data exchanged with another actor
    """


@dataclass
class Timer(Command):
    """A recurring local command.

    Pending timers do not keep the simulation alive: quiescence is decided
    while timers are still scheduled.
    """


EventPayload = Message | Command


@dataclass(order=True)
class Event:
    """A scheduled event in the simulation.

    Events are ordered by (timestamp, priority, sequence) for the priority queue.
    Lower priority values are processed first when timestamps are equal, and the
    sequence number keeps insertion order among otherwise equal events.
    """

    timestamp: float
    target_id: ActorId = field(compare=False)
    payload: EventPayload = field(compare=False)
    priority: int = 0
    sequence: int = 0
