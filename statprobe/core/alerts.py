"""Alert model and threshold checks for stats samples."""
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from ..collectors.stats_models import ServerStats
from ..config.threshold_config import ThresholdConfig

BYTES_PER_MEGABYTE = 1024 * 1024


@dataclass
class SystemAlert:
    level: str  # "WARN", "ERROR"
    message: str
    category: str  # "LOAD", "MEMORY", "NETWORK", "DISK", "PROBE"


def format_compact(value: float) -> str:
    """Shortest decimal form of value, switching to exponent form outside 1e-4..1e6."""
    number = Decimal(repr(float(value))).normalize()
    if number.is_zero():
        return "0"
    sign, digits, exponent = number.as_tuple()
    magnitude = len(digits) + exponent - 1
    if magnitude < -4 or magnitude >= 6:
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(str(d) for d in digits[1:])
        return f"{'-' if sign else ''}{mantissa}e{magnitude:+03d}"
    return format(number, 'f')


def usage_percent(used: float, total: float) -> int:
    """Usage as a whole percentage, truncated toward zero."""
    return int(used * 100.0 / total)


def free_megabytes(used: float, total: float) -> int:
    """Headroom in whole 1024*1024 units, never negative."""
    return int(max(0.0, total - used) / BYTES_PER_MEGABYTE)


def check_thresholds(stats: ServerStats, thresholds: ThresholdConfig) -> List[SystemAlert]:
    """Check a sample against thresholds; alerts come out load, memory, network, disk."""
    alerts = []

    if stats.load_average > thresholds.load_average:
        alerts.append(SystemAlert(
            "WARN", f"Load Average is too high: {format_compact(stats.load_average)}", "LOAD"))

    if stats.memory_total > 0:
        memory_pct = usage_percent(stats.memory_used, stats.memory_total)
        if memory_pct > thresholds.memory_percent:
            alerts.append(SystemAlert(
                "WARN", f"Memory usage too high: {memory_pct}%", "MEMORY"))

    if stats.network_total > 0:
        network_pct = usage_percent(stats.network_used, stats.network_total)
        if network_pct > thresholds.network_percent:
            # Free byte-rate reported as Mbit/s without a bit conversion
            free_rate = free_megabytes(stats.network_used, stats.network_total)
            alerts.append(SystemAlert(
                "WARN", f"Network bandwidth usage high: {free_rate} Mbit/s available", "NETWORK"))

    if stats.disk_total > 0:
        disk_pct = usage_percent(stats.disk_used, stats.disk_total)
        if disk_pct > thresholds.disk_percent:
            free_space = free_megabytes(stats.disk_used, stats.disk_total)
            alerts.append(SystemAlert(
                "WARN", f"Free disk space is too low: {free_space} Mb left", "DISK"))

    return alerts
