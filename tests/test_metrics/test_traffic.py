"""Tests for the traffic counter and snapshots."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from erlay_sim.core.simulator import Simulator
from erlay_sim.core.types import ActorId
from erlay_sim.metrics.results import TrafficData, TrafficSnapshot
from erlay_sim.metrics.traffic import TRAFFIC_COUNTER_ID, TrafficCounter
from erlay_sim.protocol.messages import Direction, TrafficReport


def report(peer: str, direction: Direction, num_bytes: int) -> TrafficReport:
    return TrafficReport(
        sender=ActorId(peer),
        peer_id=ActorId(peer),
        direction=direction,
        num_bytes=num_bytes,
    )


class TestTrafficCounter:
    def test_registered_under_well_known_id(self, traffic: TrafficCounter) -> None:
        assert traffic.id == TRAFFIC_COUNTER_ID

    def test_accumulates_reports(self, simulator: Simulator, traffic: TrafficCounter) -> None:
        simulator.deliver_local(report("priv0", Direction.SENT, 8), traffic.id)
        simulator.deliver_local(report("priv0", Direction.SENT, 1032), traffic.id)
        simulator.deliver_local(report("pub0", Direction.RECEIVED, 8), traffic.id)
        simulator.run_until_empty()

        snapshot = traffic.snapshot()

        assert snapshot[ActorId("priv0")] == TrafficData(bytes_sent=1040, bytes_received=0)
        assert snapshot[ActorId("pub0")] == TrafficData(bytes_sent=0, bytes_received=8)
        assert traffic.reports_processed == 3

    def test_snapshot_refused_mid_run(self, simulator: Simulator, traffic: TrafficCounter) -> None:
        """Reports still queued mean the ledger is not final."""
        simulator.deliver_local(report("priv0", Direction.SENT, 8), traffic.id)

        with pytest.raises(RuntimeError, match="quiescent"):
            traffic.snapshot()

    def test_negative_report_rejected(self, simulator: Simulator, traffic: TrafficCounter) -> None:
        simulator.deliver_local(report("priv0", Direction.SENT, -1), traffic.id)

        with pytest.raises(ValueError, match="Negative"):
            simulator.run_until_empty()

    @given(
        sizes=st.lists(
            st.tuples(st.sampled_from(["pub0", "pub1", "priv0"]), st.integers(0, 5000)),
            max_size=40,
        )
    )
    def test_order_does_not_matter(self, sizes: list[tuple[str, int]]) -> None:
        """Accumulation is commutative and exact."""
        totals = []
        for ordering in (sizes, list(reversed(sizes))):
            sim = Simulator()
            counter = TrafficCounter(simulator=sim)
            sim.register_actor(counter)
            for peer, size in ordering:
                sim.deliver_local(report(peer, Direction.SENT, size), counter.id)
            sim.run_until_empty()
            totals.append(counter.snapshot())

        assert totals[0] == totals[1]
        assert totals[0].total_sent == sum(size for _, size in sizes)


class TestTrafficSnapshot:
    def test_totals(self) -> None:
        snapshot = TrafficSnapshot(
            per_peer={
                ActorId("pub0"): TrafficData(bytes_sent=100, bytes_received=40),
                ActorId("priv0"): TrafficData(bytes_sent=40, bytes_received=100),
            }
        )

        assert snapshot.total_sent == 140
        assert snapshot.total_received == 140
        assert snapshot.total_traffic == 280

    def test_format_report(self) -> None:
        snapshot = TrafficSnapshot(
            per_peer={
                ActorId("pub0"): TrafficData(bytes_sent=1040, bytes_received=16),
                ActorId("priv0"): TrafficData(bytes_sent=16, bytes_received=1040),
            }
        )

        assert snapshot.format_report() == [
            "priv0: 16↑ 1040↓ (bytes)",
            "pub0: 1040↑ 16↓ (bytes)",
            "Total traffic: 2112 bytes",
        ]

    def test_snapshot_is_read_only(self) -> None:
        snapshot = TrafficSnapshot(per_peer={ActorId("pub0"): TrafficData(1, 2)})

        with pytest.raises(TypeError):
            snapshot.per_peer[ActorId("pub0")] = TrafficData()  # type: ignore[index]

    def test_missing_peer_reads_zero(self) -> None:
        assert TrafficSnapshot()[ActorId("nobody")] == TrafficData()

    def test_to_dict(self) -> None:
        snapshot = TrafficSnapshot(per_peer={ActorId("pub0"): TrafficData(3, 4)})

        assert snapshot.to_dict() == {
            "total_sent": 3,
            "total_received": 4,
            "total_traffic": 7,
            "per_peer": {"pub0": {"bytes_sent": 3, "bytes_received": 4}},
        }
