"""Protocol message types exchanged between peers."""

from dataclasses import dataclass, field
from enum import Enum

from ..core.actor import Message
from ..core.types import ActorId, ShortId
from .constants import GET_DATA_SIZE, INV_SIZE, TX_SIZE
from .transaction import Transaction


@dataclass
class Connect(Message):
    """Open a link from sender to the receiver. Handshake traffic is not billed."""


@dataclass
class ConnectAck(Message):
    """Accept a link opened with Connect."""


@dataclass
class Inv(Message):
    """Announce that the sender holds a transaction (flood mode)."""

    short_id: ShortId

    @property
    def size_bytes(self) -> int:
        return INV_SIZE


@dataclass
class GetData(Message):
    """Request a transaction by short id."""

    short_id: ShortId

    @property
    def size_bytes(self) -> int:
        return GET_DATA_SIZE


@dataclass
class Tx(Message):
    """Deliver a full transaction, framed with its short id."""

    tx: Transaction

    @property
    def short_id(self) -> ShortId:
        return self.tx.short_id

    @property
    def size_bytes(self) -> int:
        return TX_SIZE


@dataclass
class ReconcileExchange(Message):
    """Billed reconciliation payload settling one outbound link in both directions.

    reveal_to_self holds the ids the sender is about to fetch from the receiver;
    reveal_to_remote holds the ids the receiver is missing and should fetch.
    """

    payload_bytes: int
    reveal_to_self: frozenset[ShortId] = field(default_factory=frozenset)
    reveal_to_remote: frozenset[ShortId] = field(default_factory=frozenset)

    @property
    def size_bytes(self) -> int:
        return self.payload_bytes


class Direction(Enum):
    SENT = "sent"
    RECEIVED = "received"


@dataclass
class TrafficReport(Message):
    """Bandwidth report sent by a peer to the traffic counter. Not billed itself."""

    peer_id: ActorId
    direction: Direction
    num_bytes: int
