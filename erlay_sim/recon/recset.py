"""Set reconciliation over short transaction ids.

A real reconciliation protocol (Erlay with minisketch) exchanges a sketch whose
capacity must be estimated in advance, and bisects the sketch when the estimate
turns out too small. This module does neither: the caller hands over both
excess sets, read from the simulator's global view, and the exchange is billed
as a sketch sized exactly to the true difference. The resulting numbers are a
lower bound on what the real protocol would spend.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from erlay_sim.protocol.constants import RECONCILE_ITEM_SIZE

if TYPE_CHECKING:
    from erlay_sim.core.types import ShortId


class HasShortId(Protocol):
    @property
    def short_id(self) -> ShortId: ...


V = TypeVar("V", bound=HasShortId)


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of one reconciliation exchange."""

    payload_bytes: int
    reveal_to_self: frozenset[ShortId] = field(default_factory=frozenset)
    reveal_to_remote: frozenset[ShortId] = field(default_factory=frozenset)

    @property
    def is_noop(self) -> bool:
        return self.payload_bytes == 0


def reconcile(
    local_excess: Iterable[ShortId],
    remote_excess: Iterable[ShortId],
    item_size: int = RECONCILE_ITEM_SIZE,
) -> ReconciliationResult:
    """Settle both directions of a link in a single exchange.

    The local side learns the remote excess and the remote side learns the
    local excess. The payload is charged item_size bytes per id in the union of
    both sets: an oracle-sized sketch, never an estimate.
    """
    local = frozenset(local_excess)
    remote = frozenset(remote_excess)
    if not local and not remote:
        return ReconciliationResult(payload_bytes=0)

    return ReconciliationResult(
        payload_bytes=item_size * len(local | remote),
        reveal_to_self=remote,
        reveal_to_remote=local,
    )


class RecSet(Generic[V]):
    """A set of elements indexed by short id, the unit of reconciliation.

    Elements are only ever added; inserting an element whose id is already
    present is a no-op.
    """

    def __init__(self) -> None:
        self._items: dict[ShortId, V] = {}

    def insert(self, item: V) -> bool:
        """Add an element. Returns True if it was not already present."""
        short_id = item.short_id
        if short_id in self._items:
            return False
        self._items[short_id] = item
        return True

    def get(self, short_id: ShortId) -> V | None:
        return self._items.get(short_id)

    def ids(self) -> frozenset[ShortId]:
        return frozenset(self._items)

    def difference(self, other: Iterable[ShortId]) -> set[ShortId]:
        """Ids held here that are not in other."""
        return self._items.keys() - set(other)

    def __contains__(self, short_id: object) -> bool:
        return short_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ShortId]:
        return iter(self._items)
