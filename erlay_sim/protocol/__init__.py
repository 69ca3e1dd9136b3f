"""Protocol layer: transactions, wire messages and local commands."""

from erlay_sim.protocol.commands import Announce, ReconcileRound
from erlay_sim.protocol.constants import (
    GET_DATA_SIZE,
    INV_SIZE,
    RECONCILE_ITEM_SIZE,
    SHORT_ID_KEY,
    SHORT_ID_SIZE,
    TX_PAYLOAD_SIZE,
    TX_SIZE,
)
from erlay_sim.protocol.messages import (
    Connect,
    ConnectAck,
    Direction,
    GetData,
    Inv,
    ReconcileExchange,
    TrafficReport,
    Tx,
)
from erlay_sim.protocol.transaction import Transaction, compute_short_id

__all__ = [
    "GET_DATA_SIZE",
    "INV_SIZE",
    "RECONCILE_ITEM_SIZE",
    "SHORT_ID_KEY",
    "SHORT_ID_SIZE",
    "TX_PAYLOAD_SIZE",
    "TX_SIZE",
    "Announce",
    "Connect",
    "ConnectAck",
    "Direction",
    "GetData",
    "Inv",
    "ReconcileExchange",
    "ReconcileRound",
    "TrafficReport",
    "Transaction",
    "Tx",
    "compute_short_id",
]
