"""Tests for transactions and short id derivation."""

from random import Random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from erlay_sim.protocol.constants import SHORT_ID_KEY, TX_PAYLOAD_SIZE
from erlay_sim.protocol.transaction import Transaction, compute_short_id

payloads = st.binary(min_size=TX_PAYLOAD_SIZE, max_size=TX_PAYLOAD_SIZE)


class TestTransaction:
    def test_payload_size_enforced(self) -> None:
        with pytest.raises(ValueError, match="1024"):
            Transaction(payload=b"\x00" * 32)

    def test_random_transaction(self) -> None:
        tx = Transaction.random(Random(3))

        assert tx.size_bytes == TX_PAYLOAD_SIZE
        assert tx.short_id == compute_short_id(tx.payload)

    def test_transaction_is_immutable(self) -> None:
        tx = Transaction.random(Random(3))

        with pytest.raises(AttributeError):
            tx.payload = b"\x00" * TX_PAYLOAD_SIZE  # type: ignore[misc]

    def test_same_seed_same_transaction(self) -> None:
        assert Transaction.random(Random(5)) == Transaction.random(Random(5))


class TestShortId:
    @given(payload=payloads)
    @settings(max_examples=50)
    def test_deterministic(self, payload: bytes) -> None:
        """Independent computations of the same payload agree."""
        assert compute_short_id(payload) == compute_short_id(bytes(payload))
        assert Transaction(payload=payload).short_id == compute_short_id(payload)

    @given(payload=payloads)
    @settings(max_examples=50)
    def test_fits_in_64_bits(self, payload: bytes) -> None:
        assert 0 <= compute_short_id(payload) < 2**64

    def test_key_changes_id(self) -> None:
        payload = bytes(range(256)) * 4
        other_key = bytes(16)

        assert other_key != SHORT_ID_KEY
        assert compute_short_id(payload) != compute_short_id(payload, key=other_key)

    def test_no_collisions_in_corpus(self) -> None:
        """10,000 distinct payloads produce 10,000 distinct ids."""
        rng = Random(1234)
        payloads = {rng.randbytes(TX_PAYLOAD_SIZE) for _ in range(10_000)}
        ids = {compute_short_id(payload) for payload in payloads}

        assert len(ids) == len(payloads)
