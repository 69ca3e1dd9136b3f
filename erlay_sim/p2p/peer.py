"""Peer actor implementing flooding and reconciliation-based transaction relay."""

from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum, auto
from typing import TYPE_CHECKING

from ..core.actor import Actor, EventPayload, Message
from ..core.topology import Role
from ..errors import ConnectionRefused, UnknownTransactionRequested
from ..metrics.traffic import TRAFFIC_COUNTER_ID
from ..protocol.commands import Announce, ReconcileRound
from ..protocol.messages import (
    Connect,
    ConnectAck,
    Direction,
    GetData,
    Inv,
    ReconcileExchange,
    TrafficReport,
    Tx,
)
from ..protocol.transaction import Transaction
from ..recon.recset import RecSet, reconcile

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..core.simulator import Simulator
    from ..core.types import ActorId, ShortId

logger = logging.getLogger(__name__)


class PeerState(Enum):
    """Lifecycle of a peer during one run."""

    IDLE = auto()  # Constructed, no link established yet
    CONNECTED = auto()  # Links acknowledged, nothing relayed yet
    PROPAGATING = auto()  # Requests outstanding or a link still out of sync
    QUIESCENT = auto()  # Took part in relay and has nothing left to do


class Peer(Actor):
    """A network participant relaying transactions to its neighbors.

    Links are opened by the outbound side with Connect and accepted with
    ConnectAck. Once established a link carries relay traffic both ways; the
    initiator also owns the link's reconciliation timer.

    In flood mode every newly learned transaction is announced with Inv to all
    neighbors except the one it came from, and fetched with GetData/Tx. In
    reconcile mode nothing is announced: every reconcile_interval each outbound
    link runs one round that bills the exact set difference and fetches what
    each side is missing.
    """

    def __init__(
        self,
        peer_id: ActorId,
        role: Role,
        simulator: Simulator,
        config: SimulationConfig,
    ) -> None:
        super().__init__(peer_id, simulator)
        self._role = role
        self._config = config

        # Links (dict keeps outbound insertion-ordered)
        self._outbound: dict[ActorId, None] = {}
        self._connecting: set[ActorId] = set()
        self._inbound: set[ActorId] = set()

        # Transactions this peer holds, never shrinks
        self._known: RecSet[Transaction] = RecSet()

        # Per neighbor: known ids the neighbor holds or has been sent (subset of known)
        self._delivered: dict[ActorId, set[ShortId]] = defaultdict(set)

        # Outstanding GetData requests: id -> neighbor asked last
        self._requested: dict[ShortId, ActorId] = {}

        # Neighbors that announced an id we are still fetching
        self._announcers: dict[ShortId, set[ActorId]] = defaultdict(set)

        self._connected = False
        self._active = False
        self._unknown_requests: list[UnknownTransactionRequested] = []

    @property
    def role(self) -> Role:
        return self._role

    @property
    def is_public(self) -> bool:
        return self._role is Role.PUBLIC

    @property
    def outbound(self) -> tuple[ActorId, ...]:
        return tuple(self._outbound)

    @property
    def inbound(self) -> frozenset[ActorId]:
        return frozenset(self._inbound)

    @property
    def neighbors(self) -> list[ActorId]:
        """Outbound neighbors in link order, then inbound-only neighbors."""
        return list(self._outbound) + sorted(self._inbound - self._outbound.keys())

    @property
    def known(self) -> RecSet[Transaction]:
        return self._known

    @property
    def unknown_requests(self) -> list[UnknownTransactionRequested]:
        return list(self._unknown_requests)

    def delivered_to(self, neighbor: ActorId) -> frozenset[ShortId]:
        return frozenset(self._delivered.get(neighbor, ()))

    def knows(self, short_id: ShortId) -> bool:
        return short_id in self._known

    @property
    def state(self) -> PeerState:
        if not self._connected:
            return PeerState.IDLE
        if self._has_pending_work():
            return PeerState.PROPAGATING
        if self._active:
            return PeerState.QUIESCENT
        return PeerState.CONNECTED

    def connect(self, target: ActorId) -> None:
        """Open an outbound link to target.

        Raises ConnectionRefused, without sending anything, if target is a
        private peer.
        """
        if target == self._id:
            raise ValueError(f"{self._id} cannot connect to itself")
        if self._simulator.peer(target).role is Role.PRIVATE:
            raise ConnectionRefused(self._id, target)
        if target in self._outbound or target in self._connecting:
            return

        self._connecting.add(target)
        self.send(Connect(sender=self._id), target)

    def send(self, msg: Message, to: ActorId) -> None:
        """Send a message and report its size to the traffic counter."""
        if msg.size_bytes > 0:
            self._report_traffic(Direction.SENT, msg.size_bytes)
        super().send(msg, to)

    def on_event(self, payload: EventPayload) -> None:
        """Dispatch events to appropriate handlers."""
        if isinstance(payload, Message) and payload.size_bytes > 0:
            self._report_traffic(Direction.RECEIVED, payload.size_bytes)

        match payload:
            case Connect() as msg:
                self._handle_connect(msg)
            case ConnectAck() as msg:
                self._handle_connect_ack(msg)
            case Announce(tx=tx):
                self._handle_announce(tx)
            case Inv() as msg:
                self._handle_inv(msg)
            case GetData() as msg:
                self._handle_get_data(msg)
            case Tx() as msg:
                self._handle_tx(msg)
            case ReconcileExchange() as msg:
                self._handle_reconcile_exchange(msg)
            case ReconcileRound(neighbor=neighbor):
                self._handle_reconcile_round(neighbor)
            case Message():
                pass  # Unknown message type

    def _report_traffic(self, direction: Direction, size: int) -> None:
        self._simulator.deliver_local(
            TrafficReport(sender=self._id, peer_id=self._id, direction=direction, num_bytes=size),
            TRAFFIC_COUNTER_ID,
        )

    def _handle_connect(self, msg: Connect) -> None:
        if self._role is Role.PRIVATE:
            logger.warning("%s dropping inbound connection from %s", self._id, msg.sender)
            return

        self._inbound.add(msg.sender)
        self._connected = True
        logger.debug("%s -> %s", msg.sender, self._id)
        self.send(ConnectAck(sender=self._id), msg.sender)

    def _handle_connect_ack(self, msg: ConnectAck) -> None:
        if msg.sender not in self._connecting:
            return

        self._connecting.discard(msg.sender)
        self._outbound[msg.sender] = None
        self._connected = True

        if self._config.use_reconciliation:
            self._schedule_round(msg.sender)

    def _handle_announce(self, tx: Transaction) -> None:
        """Originate a transaction. Reconcile mode leaves it for the next round."""
        self._active = True
        if not self._known.insert(tx):
            return

        logger.debug("%s announcing %016x", self._id, tx.short_id)
        if not self._config.use_reconciliation:
            self._relay(tx.short_id, exclude=None)

    def _handle_inv(self, msg: Inv) -> None:
        self._active = True
        short_id = msg.short_id

        if short_id in self._known:
            self._delivered[msg.sender].add(short_id)
            return

        self._announcers[short_id].add(msg.sender)
        self._request(short_id, msg.sender)

    def _handle_get_data(self, msg: GetData) -> None:
        self._active = True
        tx = self._known.get(msg.short_id)
        if tx is None:
            error = UnknownTransactionRequested(self._id, msg.sender, msg.short_id)
            self._unknown_requests.append(error)
            logger.warning("%s", error)
            return

        self.send(Tx(sender=self._id, tx=tx), msg.sender)
        self._delivered[msg.sender].add(msg.short_id)

    def _handle_tx(self, msg: Tx) -> None:
        self._active = True
        short_id = msg.tx.short_id

        self._requested.pop(short_id, None)
        is_new = self._known.insert(msg.tx)

        self._delivered[msg.sender].add(short_id)
        for announcer in self._announcers.pop(short_id, ()):
            self._delivered[announcer].add(short_id)

        if is_new and not self._config.use_reconciliation:
            self._relay(short_id, exclude=msg.sender)

    def _relay(self, short_id: ShortId, exclude: ActorId | None) -> None:
        """Announce to every neighbor not already known to hold the transaction."""
        for neighbor in self.neighbors:
            if neighbor == exclude or short_id in self._delivered[neighbor]:
                continue
            self.send(Inv(sender=self._id, short_id=short_id), neighbor)
            self._delivered[neighbor].add(short_id)

    def _request(self, short_id: ShortId, neighbor: ActorId) -> None:
        self._requested[short_id] = neighbor
        self.send(GetData(sender=self._id, short_id=short_id), neighbor)

    def _schedule_round(self, neighbor: ActorId) -> None:
        self.schedule_command(self._config.reconcile_interval, ReconcileRound(neighbor=neighbor))

    def _excess(self, neighbor: ActorId) -> tuple[set[ShortId], set[ShortId]]:
        """Local and remote excess for an outbound link.

        The neighbor's set is read from the simulator's global view; this is
        what lets the exchange be sized exactly to the difference.
        """
        remote = self._simulator.peer(neighbor).known

        local_excess = self._known.difference(self._delivered[neighbor] | remote.ids())
        remote_excess = remote.difference(self._known.ids() | set(self._requested))
        return local_excess, remote_excess

    def _handle_reconcile_round(self, neighbor: ActorId) -> None:
        self._schedule_round(neighbor)

        # Ids both sides already hold cancel out of the difference at no cost
        remote = self._simulator.peer(neighbor).known
        self._delivered[neighbor].update(self._known.ids() & remote.ids())

        local_excess, remote_excess = self._excess(neighbor)
        result = reconcile(local_excess, remote_excess)
        if result.is_noop:
            return

        self._active = True
        logger.debug(
            "%s reconciling with %s: %d to send, %d to fetch (%d bytes)",
            self._id,
            neighbor,
            len(result.reveal_to_remote),
            len(result.reveal_to_self),
            result.payload_bytes,
        )
        self.send(
            ReconcileExchange(
                sender=self._id,
                payload_bytes=result.payload_bytes,
                reveal_to_self=result.reveal_to_self,
                reveal_to_remote=result.reveal_to_remote,
            ),
            neighbor,
        )
        self._delivered[neighbor].update(result.reveal_to_remote)

        for short_id in sorted(result.reveal_to_self):
            if short_id not in self._known:
                self._request(short_id, neighbor)

    def _handle_reconcile_exchange(self, msg: ReconcileExchange) -> None:
        """Fetch the ids the initiator found missing on this side."""
        self._active = True
        for short_id in sorted(msg.reveal_to_remote):
            if short_id in self._known:
                self._delivered[msg.sender].add(short_id)
            elif short_id not in self._requested:
                self._request(short_id, msg.sender)

    def _has_pending_work(self) -> bool:
        if self._requested:
            return True
        if self._config.use_reconciliation:
            for neighbor in self._outbound:
                local_excess, remote_excess = self._excess(neighbor)
                if local_excess or remote_excess:
                    return True
        return False
