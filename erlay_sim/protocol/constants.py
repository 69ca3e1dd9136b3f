"""Protocol constants for transaction relay."""

# Transaction constants
TX_PAYLOAD_SIZE = 1024  # bytes per transaction payload

# Short identifiers
SHORT_ID_SIZE = 8  # bytes, 64-bit identifier
# Global SipHash-style key pair (k0, k1); every peer derives ids with the same key
SHORT_ID_KEY = (0xDE).to_bytes(8, "little") + (0xAD).to_bytes(8, "little")

# Wire sizes
INV_SIZE = SHORT_ID_SIZE  # one id
GET_DATA_SIZE = SHORT_ID_SIZE  # one id
TX_SIZE = TX_PAYLOAD_SIZE + SHORT_ID_SIZE  # payload framed with its id

# Cost of one identifier inside a reconciliation payload
RECONCILE_ITEM_SIZE = SHORT_ID_SIZE
