"""Stats endpoint collector: one HTTP fetch parsed into a ServerStats sample."""
import logging
import math
import time
from typing import Callable, List, Optional

import requests

from ..config.config import Config
from .stats_models import FIELD_COUNT, FailureReason, ServerStats, StatsError

logger = logging.getLogger(__name__)

# ASCII whitespace only; str.strip() would also eat \x1c-\x1f and Unicode spaces
WHITESPACE = " \t\n\v\f\r"

# A stats line is well under 1 KiB
MAX_BODY_BYTES = 64 * 1024
# One byte per read; larger reads block until filled, past the deadline
READ_CHUNK_BYTES = 1

USAGE_PAIRS = (
    ('memory_used', 'memory_total'),
    ('disk_used', 'disk_total'),
    ('network_used', 'network_total'),
)


def split_fields(body: str) -> List[str]:
    """Split a trimmed stats line into its comma-separated fields."""
    parts = [part.strip(WHITESPACE) for part in body.strip(WHITESPACE).split(',')]
    if len(parts) != FIELD_COUNT:
        raise StatsError(FailureReason.FIELD_COUNT, f"expected {FIELD_COUNT}, got {len(parts)}")
    return parts


def parse_number(text: str) -> float:
    """Parse one field as a finite float."""
    # float() also accepts digit separators and non-ASCII digits, which the endpoint never sends
    if '_' in text or not text.isascii():
        raise StatsError(FailureReason.NOT_A_NUMBER, repr(text))
    try:
        value = float(text)
    except ValueError:
        raise StatsError(FailureReason.NOT_A_NUMBER, repr(text)) from None
    if not math.isfinite(value):
        raise StatsError(FailureReason.NOT_A_NUMBER, repr(text))
    return value


def validate_stats(stats: ServerStats) -> ServerStats:
    """Reject samples whose totals cannot serve as a ratio denominator."""
    for used_name, total_name in USAGE_PAIRS:
        used, total = getattr(stats, used_name), getattr(stats, total_name)
        if total <= 0:
            raise StatsError(FailureReason.NON_POSITIVE_TOTAL, total_name)
        # Finite fields can still overflow once divided or subtracted
        if not (math.isfinite(used * 100.0 / total) and math.isfinite(total - used)):
            raise StatsError(FailureReason.OUT_OF_RANGE, f"{used_name}={used!r} {total_name}={total!r}")
    return stats


def parse_stats(body: str) -> ServerStats:
    """Run the full parse pipeline on a response body."""
    values = [parse_number(part) for part in split_fields(body)]
    return validate_stats(ServerStats(*values))


class StatsCollector:
    """Fetches and parses samples from the stats endpoint."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None,
                 clock: Callable[[], float] = time.monotonic):
        """Initialize the collector with a reusable HTTP session."""
        self.config = config
        self.session = session or requests.Session()
        self.clock = clock

    def fetch_body(self) -> str:
        """GET the stats URL and return the decoded body.

        request_timeout bounds the whole exchange, body included. The body is
        read a byte at a time so a server dribbling bytes is cut off at the
        deadline, give or take one stalled socket read.
        """
        timeout = self.config.request_timeout
        deadline = self.clock() + timeout
        try:
            response = self.session.get(self.config.stats_url, timeout=timeout, stream=True)
        except requests.RequestException as exc:
            raise StatsError(FailureReason.TRANSPORT, str(exc)) from exc

        try:
            if response.status_code != requests.codes.ok:
                raise StatsError(FailureReason.BAD_STATUS, str(response.status_code))

            body = bytearray()
            for chunk in response.iter_content(chunk_size=READ_CHUNK_BYTES):
                if self.clock() > deadline:
                    raise StatsError(FailureReason.TRANSPORT, f"body not received within {timeout}s")
                body.extend(chunk)
                if len(body) > MAX_BODY_BYTES:
                    raise StatsError(FailureReason.UNREADABLE_BODY, f"body over {MAX_BODY_BYTES} bytes")
            if self.clock() > deadline:
                raise StatsError(FailureReason.TRANSPORT, f"body not received within {timeout}s")

            return body.decode('utf-8')
        except requests.RequestException as exc:
            raise StatsError(FailureReason.TRANSPORT, str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise StatsError(FailureReason.UNREADABLE_BODY, str(exc)) from exc
        finally:
            response.close()

    def collect(self) -> ServerStats:
        """Fetch one sample; raises StatsError on any failure."""
        stats = parse_stats(self.fetch_body())
        logger.debug("Sample: %s", stats)
        return stats

    def close(self):
        """Release the HTTP session."""
        self.session.close()
