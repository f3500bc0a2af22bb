"""Sample evaluation: one fetch, threshold checks, alert output."""
import logging

from ..collectors.stats_collector import StatsCollector
from ..collectors.stats_models import StatsError
from ..config.config import Config
from ..display import AlertPrinter
from .alerts import check_thresholds

logger = logging.getLogger(__name__)


class SampleEvaluator:
    """Turns one stats fetch into printed warnings and a success flag."""

    def __init__(self, config: Config, collector: StatsCollector, printer: AlertPrinter):
        self.config = config
        self.collector = collector
        self.printer = printer

    def poll_once(self) -> bool:
        """Fetch, parse and check one sample; False if no usable sample arrived."""
        try:
            stats = self.collector.collect()
        except StatsError as exc:
            logger.debug("Fetch failed (%s): %s", exc.reason.name, exc)
            return False

        for alert in check_thresholds(stats, self.config.thresholds):
            self.printer.print_alert(alert)
        return True
