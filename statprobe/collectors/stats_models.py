"""Data models for the stats collector."""
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ServerStats:
    """One sample from the stats endpoint, in wire order."""
    load_average: float
    memory_total: float
    memory_used: float
    disk_total: float
    disk_used: float
    network_total: float   # bytes/s
    network_used: float    # bytes/s


FIELD_COUNT = 7


class FailureReason(Enum):
    """Why a fetch did not produce a usable sample."""
    TRANSPORT = "transport error"
    BAD_STATUS = "unexpected HTTP status"
    UNREADABLE_BODY = "unreadable body"
    FIELD_COUNT = "wrong field count"
    NOT_A_NUMBER = "non-numeric field"
    NON_POSITIVE_TOTAL = "non-positive total"
    OUT_OF_RANGE = "usage out of range"


class StatsError(Exception):
    """A stage of the fetch/parse pipeline rejected the sample."""

    def __init__(self, reason: FailureReason, detail: str = ""):
        super().__init__(f"{reason.value}: {detail}" if detail else reason.value)
        self.reason = reason
        self.detail = detail
