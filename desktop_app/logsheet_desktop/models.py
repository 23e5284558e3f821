"""Domain models of the desktop client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class WorkStatus(str, Enum):
    """Which hour bucket a shift interval is booked to."""

    WORKING = "working"
    IDLE = "idle"
    BREAKDOWN = "breakdown"


class LogsheetStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


@dataclass(slots=True, frozen=True)
class WorkingInterval:
    """Wall-clock start and end of one shift segment (`HH:MM`, no date)."""

    commenced_time: Optional[str] = None
    completed_time: Optional[str] = None


@dataclass(slots=True, frozen=True)
class MeterReadingPair:
    """HMR/KMR readings as typed into the form."""

    commenced_reading: Optional[str] = None
    completed_reading: Optional[str] = None


@dataclass(slots=True, frozen=True)
class LogsheetStats:
    total: int = 0
    pending: int = 0
    accepted: int = 0
    rejected: int = 0


__all__ = [
    "LogsheetStats",
    "LogsheetStatus",
    "MeterReadingPair",
    "WorkStatus",
    "WorkingInterval",
]
