"""Tests for topology generation and validation."""

import networkx as nx
import pytest

from erlay_sim.config import SimulationConfig
from erlay_sim.core.topology import Role, Topology, build_topology, peer_id, validate_topology
from erlay_sim.core.types import ActorId
from erlay_sim.errors import MalformedTopology


class TestBuildTopology:
    def test_peer_ids_encode_role(self) -> None:
        assert peer_id(Role.PUBLIC, 0) == ActorId("pub0")
        assert peer_id(Role.PRIVATE, 12) == ActorId("priv12")

    def test_reference_topology(self) -> None:
        """Public peers interconnect; every private peer connects to every public peer."""
        topology = build_topology(SimulationConfig(num_private=8, num_public=2))

        assert len(topology.roles) == 10
        assert sum(role is Role.PUBLIC for role in topology.roles.values()) == 2
        # 2 public-public links (one each way) + 8 * 2 private-public links
        assert len(topology.edges) == 18
        assert (ActorId("pub0"), ActorId("pub1")) in topology.edges
        assert (ActorId("pub1"), ActorId("pub0")) in topology.edges
        assert topology.outbound(ActorId("priv3")) == [ActorId("pub0"), ActorId("pub1")]

    def test_no_link_targets_private_peer(self) -> None:
        topology = build_topology(SimulationConfig(num_private=20, num_public=3))

        for _, target in topology.edges:
            assert topology.roles[target] is Role.PUBLIC

    def test_graph_is_connected(self) -> None:
        G = build_topology(SimulationConfig(num_private=5, num_public=3)).graph()

        assert isinstance(G, nx.DiGraph)
        assert nx.is_weakly_connected(G)
        for node, role in G.nodes(data="role"):
            if role is Role.PRIVATE:
                assert G.in_degree(node) == 0

    def test_private_peers_without_public_peers_rejected(self) -> None:
        with pytest.raises(MalformedTopology, match="no public peer"):
            build_topology(SimulationConfig(num_private=4, num_public=0))

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(MalformedTopology, match="non-negative"):
            build_topology(SimulationConfig(num_private=-1, num_public=2))

    def test_public_only_network(self) -> None:
        topology = build_topology(SimulationConfig(num_private=0, num_public=3))

        assert len(topology.edges) == 6


class TestValidateTopology:
    def test_private_without_outbound_rejected(self) -> None:
        topology = Topology(
            roles={ActorId("pub0"): Role.PUBLIC, ActorId("priv0"): Role.PRIVATE},
            edges=[],
        )

        with pytest.raises(MalformedTopology, match="no outbound"):
            validate_topology(topology)

    def test_link_into_private_rejected(self) -> None:
        topology = Topology(
            roles={ActorId("pub0"): Role.PUBLIC, ActorId("priv0"): Role.PRIVATE},
            edges=[(ActorId("priv0"), ActorId("pub0")), (ActorId("pub0"), ActorId("priv0"))],
        )

        with pytest.raises(MalformedTopology, match="private peer"):
            validate_topology(topology)

    def test_disconnected_rejected(self) -> None:
        topology = Topology(
            roles={
                ActorId("pub0"): Role.PUBLIC,
                ActorId("pub1"): Role.PUBLIC,
                ActorId("priv0"): Role.PRIVATE,
            },
            edges=[(ActorId("priv0"), ActorId("pub0"))],
        )

        with pytest.raises(MalformedTopology, match="not connected"):
            validate_topology(topology)

    def test_unknown_target_rejected(self) -> None:
        topology = Topology(
            roles={ActorId("priv0"): Role.PRIVATE},
            edges=[(ActorId("priv0"), ActorId("pub9"))],
        )

        with pytest.raises(MalformedTopology, match="unknown peer"):
            validate_topology(topology)
