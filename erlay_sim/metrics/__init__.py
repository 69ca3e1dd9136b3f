"""Traffic accounting for simulations."""

from .results import TrafficData, TrafficSnapshot
from .traffic import TRAFFIC_COUNTER_ID, TrafficCounter

__all__ = [
    "TRAFFIC_COUNTER_ID",
    "TrafficCounter",
    "TrafficData",
    "TrafficSnapshot",
]
