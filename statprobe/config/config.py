"""Main configuration data structure."""
from dataclasses import dataclass, field
from .threshold_config import ThresholdConfig

DEFAULT_STATS_URL = "http://srv.msk01.gigacorp.local/_stats"


@dataclass
class Config:
    """Main configuration class."""
    stats_url: str = DEFAULT_STATS_URL
    poll_interval: float = 1.0
    request_timeout: float = 2.0
    max_errors: int = 3
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self):
        """Fix invalid values."""
        if not self.stats_url:
            self.stats_url = DEFAULT_STATS_URL
        if self.poll_interval <= 0:
            self.poll_interval = 1.0
        if self.request_timeout <= 0:
            self.request_timeout = 2.0
        if self.max_errors <= 0:
            self.max_errors = 3
