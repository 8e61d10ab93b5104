"""Battery storage engine -- recommendation-driven battery level tracking."""

from .soc_tracker import BatteryLevelTracker

__all__ = [
    "BatteryLevelTracker",
]
