"""Discrete event simulation engine."""

from __future__ import annotations

import heapq
import logging
from random import Random
from typing import TYPE_CHECKING, TypeVar

from erlay_sim.core.events import Event, Timer
from erlay_sim.errors import SimulationStalled

if TYPE_CHECKING:
    from erlay_sim.config import SimulationConfig
    from erlay_sim.core.actor import Actor
    from erlay_sim.core.events import EventPayload
    from erlay_sim.core.network import Network
    from erlay_sim.core.topology import Topology
    from erlay_sim.core.types import ActorId, ShortId
    from erlay_sim.metrics.traffic import TrafficCounter
    from erlay_sim.p2p.peer import Peer

logger = logging.getLogger(__name__)

ActorT = TypeVar("ActorT", bound="Actor")


class Simulator:
    """Single-threaded, deterministic discrete event simulator.

    Uses a min-heap priority queue for event scheduling and processing. The
    events targeting an actor form that actor's inbox; ties are broken by
    insertion order, so delivery over a single link is FIFO.
    All randomness is derived from a seeded RNG for reproducibility.
    """

    def __init__(self, seed: int = 42) -> None:
        self._current_time: float = 0.0
        self._event_queue: list[Event] = []
        self._actors: dict[ActorId, Actor] = {}
        self._rng = Random(seed)
        self._events_processed: int = 0
        self._next_sequence: int = 0
        # Scheduled events that are not recurring timers
        self._pending_work: int = 0

        self._network: Network | None = None
        self._topology: Topology | None = None
        self._traffic: TrafficCounter | None = None
        self._max_time: float | None = None

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def rng(self) -> Random:
        return self._rng

    @property
    def actors(self) -> dict[ActorId, Actor]:
        return self._actors

    def actors_by_type(self, actor_type: type[ActorT]) -> list[ActorT]:
        return [actor for actor in self._actors.values() if isinstance(actor, actor_type)]

    @property
    def events_processed(self) -> int:
        return self._events_processed

    @property
    def peers(self) -> list[Peer]:
        from erlay_sim.p2p.peer import Peer

        return self.actors_by_type(Peer)

    def peer(self, peer_id: ActorId) -> Peer:
        """Look up a peer by id in the actor arena."""
        from erlay_sim.p2p.peer import Peer

        actor = self._actors.get(peer_id)
        if not isinstance(actor, Peer):
            raise KeyError(f"No peer registered as {peer_id}")
        return actor

    @property
    def network(self) -> Network:
        if self._network is None:
            raise RuntimeError("Simulator not configured with network")
        return self._network

    @property
    def topology(self) -> Topology:
        if self._topology is None:
            raise RuntimeError("Simulator not configured with topology")
        return self._topology

    @property
    def traffic(self) -> TrafficCounter:
        if self._traffic is None:
            raise RuntimeError("Simulator not configured with traffic counter")
        return self._traffic

    def register_actor(self, actor: Actor) -> None:
        if actor.id in self._actors:
            raise ValueError(f"Actor {actor.id} already registered")
        self._actors[actor.id] = actor

    def schedule(self, event: Event) -> None:
        if event.timestamp < self._current_time:
            raise ValueError(
                f"Cannot schedule event in the past: {event.timestamp} < {self._current_time}"
            )
        event.sequence = self._next_sequence
        self._next_sequence += 1
        if not isinstance(event.payload, Timer):
            self._pending_work += 1
        heapq.heappush(self._event_queue, event)

    def deliver_local(self, payload: EventPayload, target_id: ActorId) -> None:
        """Deliver a payload immediately to a target actor, bypassing the network."""
        self.schedule(
            Event(
                timestamp=self._current_time,
                priority=0,
                target_id=target_id,
                payload=payload,
            )
        )

    def run(self, until: float) -> None:
        while self._event_queue and self._current_time < until:
            event = heapq.heappop(self._event_queue)

            # Don't process events beyond our target time
            if event.timestamp > until:
                heapq.heappush(self._event_queue, event)
                break

            self._step(event)

    def run_until_empty(self) -> None:
        while self._event_queue:
            self._step(heapq.heappop(self._event_queue))

    def run_until_quiescent(self) -> None:
        """Process events until the whole network is quiescent.

        Quiescence means no message or local command is pending and no peer
        has outstanding propagation work. Recurring timers may remain queued.
        """
        while not self.is_quiescent():
            if not self._event_queue:
                break
            event = heapq.heappop(self._event_queue)
            if self._max_time is not None and event.timestamp > self._max_time:
                heapq.heappush(self._event_queue, event)
                raise SimulationStalled(self._current_time, self._pending_work)
            self._step(event)

        logger.info(
            "Quiescent at t=%.3fs after %d events", self._current_time, self._events_processed
        )

    def is_quiescent(self) -> bool:
        from erlay_sim.p2p.peer import PeerState

        if self._pending_work > 0:
            return False
        return all(peer.state is not PeerState.PROPAGATING for peer in self.peers)

    def _step(self, event: Event) -> None:
        self._current_time = event.timestamp
        if not isinstance(event.payload, Timer):
            self._pending_work -= 1
        self._dispatch_event(event)
        self._events_processed += 1

    def _dispatch_event(self, event: Event) -> None:
        if event.target_id not in self._actors:
            raise RuntimeError(f"Event targeted unknown actor: {event.target_id}")
        actor = self._actors[event.target_id]
        actor.on_event(event.payload)

    def pending_event_count(self) -> int:
        return len(self._event_queue)

    def pending_work_count(self) -> int:
        return self._pending_work

    @classmethod
    def build(cls, config: SimulationConfig | None = None) -> Simulator:
        """Build a fully connected simulator.

        Creates all components (Network, TrafficCounter, Peers), validates the
        topology, and runs the Connect/ConnectAck handshake for every edge so
        that the returned simulator is ready for transactions to be announced.
        """
        from erlay_sim.config import SimulationConfig
        from erlay_sim.core.network import Network
        from erlay_sim.core.topology import build_topology
        from erlay_sim.metrics.traffic import TrafficCounter
        from erlay_sim.p2p.peer import Peer

        if config is None:
            config = SimulationConfig()

        # Validate before anything is registered or scheduled
        topology = build_topology(config)

        simulator = cls(seed=config.seed)
        simulator._max_time = config.max_time

        traffic = TrafficCounter(simulator=simulator)
        simulator.register_actor(traffic)

        network = Network(simulator=simulator, latency=config.link_latency)

        for peer_id, role in topology.roles.items():
            peer = Peer(peer_id=peer_id, role=role, simulator=simulator, config=config)
            simulator.register_actor(peer)

        simulator._network = network
        simulator._topology = topology
        simulator._traffic = traffic

        for source, target in topology.edges:
            simulator.peer(source).connect(target)

        simulator.run_until_quiescent()
        logger.info(
            "Topology established: %d peers, %d links (%s mode)",
            len(topology.roles),
            len(topology.edges),
            config.relay_mode.name.lower(),
        )
        return simulator

    def announce_transaction(self, origin: Peer) -> ShortId:
        """Inject a freshly generated transaction at the origin peer."""
        from erlay_sim.protocol.commands import Announce
        from erlay_sim.protocol.transaction import Transaction

        tx = Transaction.random(self._rng)
        self.deliver_local(Announce(tx=tx), origin.id)
        return tx.short_id
