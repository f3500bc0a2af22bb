"""Plain line output of alerts using a Rich console."""
from typing import Optional

from rich.console import Console

from .core.alerts import SystemAlert


class AlertPrinter:
    """Writes one stdout line per alert, exactly as formatted."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the printer with a console that leaves text untouched."""
        self.console = console or Console(highlight=False, markup=False, emoji=False,
                                          soft_wrap=True)

    def print_alert(self, alert: SystemAlert):
        """Print the alert message as a single line."""
        self.console.print(alert.message, highlight=False, markup=False, emoji=False,
                           soft_wrap=True)
