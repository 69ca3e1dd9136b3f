"""Core simulation infrastructure."""

from erlay_sim.core.actor import Actor, Command, Event, EventPayload, Message, Timer
from erlay_sim.core.network import Network
from erlay_sim.core.simulator import Simulator
from erlay_sim.core.topology import Role, Topology, build_topology, validate_topology
from erlay_sim.core.types import ActorId, ShortId

__all__ = [
    "Actor",
    "ActorId",
    "Command",
    "Event",
    "EventPayload",
    "Message",
    "Network",
    "Role",
    "ShortId",
    "Simulator",
    "Timer",
    "Topology",
    "build_topology",
    "validate_topology",
]
