"""Peer actors."""

from erlay_sim.p2p.peer import Peer, PeerState

__all__ = ["Peer", "PeerState"]
