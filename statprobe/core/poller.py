"""Fixed-period poller that gives up after repeated fetch failures."""
import logging
import time
from typing import Callable

from ..config.config import Config
from ..display import AlertPrinter
from .alerts import SystemAlert
from .evaluator import SampleEvaluator

logger = logging.getLogger(__name__)

FATAL_MESSAGE = "Unable to fetch server statistic"


class Poller:
    """Runs the evaluator once per tick and tracks consecutive failures."""

    def __init__(self, config: Config, evaluator: SampleEvaluator, printer: AlertPrinter,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        """Initialize the poller; clock and sleep are replaceable for tests."""
        self.config = config
        self.evaluator = evaluator
        self.printer = printer
        self.clock = clock
        self.sleep = sleep
        self.consecutive_failures = 0
        self.ticks = 0

    def tick(self) -> bool:
        """Perform one poll; returns False once the failure limit is reached."""
        self.ticks += 1
        if self.evaluator.poll_once():
            self.consecutive_failures = 0
        else:
            self.consecutive_failures += 1
            logger.debug("Consecutive failures: %d/%d",
                         self.consecutive_failures, self.config.max_errors)

        if self.consecutive_failures >= self.config.max_errors:
            logger.error("Giving up after %d consecutive failed fetches of %s",
                         self.consecutive_failures, self.config.stats_url)
            self.printer.print_alert(SystemAlert("ERROR", FATAL_MESSAGE, "PROBE"))
            return False
        return True

    def run(self):
        """Poll every interval until the failure limit is hit.

        The first poll happens one interval after start. A tick that overruns
        its slot is followed immediately by the next one, without catching up
        on missed slots.
        """
        interval = self.config.poll_interval
        next_tick = self.clock() + interval

        while True:
            delay = next_tick - self.clock()
            if delay > 0:
                self.sleep(delay)

            if not self.tick():
                return

            now = self.clock()
            next_tick += interval
            if next_tick <= now:
                next_tick = now
