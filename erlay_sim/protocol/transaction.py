"""Transactions and their short identifiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from hashlib import blake2b
from typing import TYPE_CHECKING

from erlay_sim.core.types import ShortId
from erlay_sim.protocol.constants import SHORT_ID_KEY, SHORT_ID_SIZE, TX_PAYLOAD_SIZE

if TYPE_CHECKING:
    from random import Random


def compute_short_id(payload: bytes, key: bytes = SHORT_ID_KEY) -> ShortId:
    """Derive the 64-bit short id of a payload with a keyed hash.

    The key is global, so two peers computing the id of the same payload
    independently always agree.
    """
    digest = blake2b(payload, digest_size=SHORT_ID_SIZE, key=key).digest()
    return ShortId(int.from_bytes(digest, "little"))


@dataclass(frozen=True)
class Transaction:
    """A fixed-size opaque transaction. Only its size and id matter."""

    payload: bytes = field(repr=False)
    short_id: ShortId = field(init=False)

    def __post_init__(self) -> None:
        if len(self.payload) != TX_PAYLOAD_SIZE:
            raise ValueError(
                f"Transaction payload must be {TX_PAYLOAD_SIZE} bytes, got {len(self.payload)}"
            )
        object.__setattr__(self, "short_id", compute_short_id(self.payload))

    @classmethod
    def random(cls, rng: Random) -> Transaction:
        return cls(payload=rng.randbytes(TX_PAYLOAD_SIZE))

    @property
    def size_bytes(self) -> int:
        return len(self.payload)
