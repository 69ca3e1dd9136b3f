"""Network topology generation and validation."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

import networkx as nx

from erlay_sim.errors import MalformedTopology

if TYPE_CHECKING:
    from erlay_sim.config import SimulationConfig
    from erlay_sim.core.types import ActorId

logger = logging.getLogger(__name__)


class Role(Enum):
    """Whether a peer accepts inbound links."""

    PUBLIC = "pub"
    PRIVATE = "priv"


class Topology(NamedTuple):
    """Network topology: peer roles and directed (initiator, acceptor) links."""

    roles: dict[ActorId, Role]
    edges: list[tuple[ActorId, ActorId]]

    def graph(self) -> nx.DiGraph:
        G = nx.DiGraph()
        for peer_id, role in self.roles.items():
            G.add_node(peer_id, role=role)
        G.add_edges_from(self.edges)
        return G

    def outbound(self, peer_id: ActorId) -> list[ActorId]:
        return [target for source, target in self.edges if source == peer_id]


def peer_id(role: Role, index: int) -> ActorId:
    from erlay_sim.core.types import ActorId

    return ActorId(f"{role.value}{index}")


def build_topology(config: SimulationConfig) -> Topology:
    """Build the relay topology.

    Public peers interconnect pairwise (one link in each direction) and every
    private peer opens an outbound link to every public peer.
    """
    if config.num_private < 0 or config.num_public < 0:
        raise MalformedTopology(
            f"Peer counts must be non-negative: {config.num_private} private, "
            f"{config.num_public} public"
        )
    if config.num_private > 0 and config.num_public == 0:
        raise MalformedTopology(f"{config.num_private} private peers but no public peer to join")

    public = [peer_id(Role.PUBLIC, i) for i in range(config.num_public)]
    private = [peer_id(Role.PRIVATE, i) for i in range(config.num_private)]

    roles = {pid: Role.PUBLIC for pid in public}
    roles.update({pid: Role.PRIVATE for pid in private})

    edges: list[tuple[ActorId, ActorId]] = []
    for this_id in public:
        for other_id in public:
            if this_id != other_id:
                edges.append((this_id, other_id))

    for this_id in private:
        for other_id in public:
            edges.append((this_id, other_id))

    topology = Topology(roles=roles, edges=edges)
    validate_topology(topology)
    logger.debug("Built topology with %d peers and %d links", len(roles), len(edges))
    return topology


def validate_topology(topology: Topology) -> None:
    """Reject topologies that cannot propagate every transaction to every peer."""
    G = topology.graph()

    for source, target in G.edges():
        if source == target:
            raise MalformedTopology(f"Self-link on {source}")
        if target not in topology.roles:
            raise MalformedTopology(f"Link {source} -> {target} targets an unknown peer")
        if topology.roles.get(target) is Role.PRIVATE:
            raise MalformedTopology(f"Link {source} -> {target} targets a private peer")

    for pid, role in topology.roles.items():
        if role is Role.PRIVATE and G.out_degree(pid) == 0:
            raise MalformedTopology(f"Private peer {pid} has no outbound links")

    if G.number_of_nodes() > 1 and not nx.is_weakly_connected(G):
        raise MalformedTopology("Topology is not connected")
