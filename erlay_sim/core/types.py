"""Core type aliases for the simulation."""

from typing import NewType

# Actor identification - "pub0", "priv3", or a service actor such as the traffic counter
ActorId = NewType("ActorId", str)

# 64-bit short transaction identifier used in inventory and reconciliation
ShortId = NewType("ShortId", int)
