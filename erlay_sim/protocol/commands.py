"""Commands for local simulation events (not transmitted over the network).

Commands are local events that actors send to themselves or receive from
the simulation driver. Unlike Messages, Commands are never billed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from erlay_sim.core.events import Command, Timer

if TYPE_CHECKING:
    from erlay_sim.core.types import ActorId
    from erlay_sim.protocol.transaction import Transaction

__all__ = [
    "Announce",
    "Command",
    "ReconcileRound",
]


@dataclass
class Announce(Command):
    """Originate a transaction locally. Injected once per private peer."""

    tx: Transaction


@dataclass
class ReconcileRound(Timer):
    """Periodic reconciliation with one outbound neighbor."""

    neighbor: ActorId
