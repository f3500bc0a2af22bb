"""Threshold configuration data structure."""
from dataclasses import dataclass


@dataclass
class ThresholdConfig:
    """Alert thresholds for the stats endpoint metrics.

    Percent thresholds are whole numbers compared against truncated usage.
    """
    load_average: float = 30.0
    memory_percent: int = 80
    disk_percent: int = 90
    network_percent: int = 90

    def __post_init__(self):
        """Fix invalid values."""
        if self.load_average <= 0:
            self.load_average = 30.0
        if self.memory_percent <= 0 or self.memory_percent >= 100:
            self.memory_percent = 80
        if self.disk_percent <= 0 or self.disk_percent >= 100:
            self.disk_percent = 90
        if self.network_percent <= 0 or self.network_percent >= 100:
            self.network_percent = 90
