"""Derivation of the totals block from times, readings and work status.

The calculator never raises. Inputs that are missing or cannot be parsed
leave the corresponding totals fields as they were in ``previous``.
"""

from __future__ import annotations

import datetime as dt
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

from .models import MeterReadingPair, WorkStatus, WorkingInterval
from .schemas import Totals

logger = logging.getLogger(__name__)

_REFERENCE_DATE = dt.date(2000, 1, 1)
_TENTH = Decimal("0.1")
_SECONDS_PER_HOUR = Decimal(3600)
# readings with a decimal exponent beyond this are treated as typos
_MAX_READING_EXPONENT = 15

HOUR_BUCKETS: Dict[WorkStatus, str] = {
    WorkStatus.WORKING: "working_hours",
    WorkStatus.IDLE: "idle_hours",
    WorkStatus.BREAKDOWN: "breakdown_hours",
}


def _parse_time_of_day(value: Optional[str]) -> Optional[dt.time]:
    if not value or not value.strip():
        return None
    try:
        return dt.datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        logger.debug("Ignoring unparsable time of day %r", value)
        return None


def _parse_reading(value: Optional[str]) -> Optional[Decimal]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        reading = Decimal(text)
    except InvalidOperation:
        logger.debug("Ignoring non-numeric meter reading %r", value)
        return None
    if not reading.is_finite() or abs(reading.adjusted()) > _MAX_READING_EXPONENT:
        logger.debug("Ignoring out-of-range meter reading %r", value)
        return None
    return reading


def _format_run(value: Decimal) -> str:
    # normalize() keeps "45" from turning into "45.0", format "f" avoids "1E+2"
    return format(value.normalize(), "f")


def elapsed_hours(interval: WorkingInterval) -> Optional[float]:
    """Hours between commenced and completed time, rounded half-up to 0.1.

    A completed time earlier than the commenced time is read as the next day.
    Returns ``None`` when either time is absent or invalid.
    """

    commenced = _parse_time_of_day(interval.commenced_time)
    completed = _parse_time_of_day(interval.completed_time)
    if commenced is None or completed is None:
        return None
    start = dt.datetime.combine(_REFERENCE_DATE, commenced)
    end = dt.datetime.combine(_REFERENCE_DATE, completed)
    if end < start:
        end += dt.timedelta(days=1)
    seconds = Decimal(int((end - start).total_seconds()))
    hours = (seconds / _SECONDS_PER_HOUR).quantize(_TENTH, rounding=ROUND_HALF_UP)
    return float(hours)


def meter_run(readings: MeterReadingPair) -> Optional[str]:
    """Completed minus commenced reading as text, or ``None`` if not derivable."""

    commenced = _parse_reading(readings.commenced_reading)
    completed = _parse_reading(readings.completed_reading)
    if commenced is None or completed is None:
        return None
    if completed < commenced:
        logger.debug("Meter reading went backwards (%s -> %s), run not derived", commenced, completed)
        return None
    try:
        return _format_run(completed - commenced)
    except ArithmeticError:
        logger.debug("Meter run of %s -> %s not representable", commenced, completed)
        return None


def calculate_totals(
    interval: WorkingInterval,
    work_status: Union[WorkStatus, str],
    readings: MeterReadingPair,
    quantity_produced: Optional[float],
    previous: Optional[Totals] = None,
) -> Totals:
    """Return a new totals block derived from the form inputs.

    Fields that cannot be derived keep their value from ``previous``;
    ``fuel_in_liters`` is never touched.
    """

    base = previous if previous is not None else Totals()
    updates: Dict[str, Any] = {}

    try:
        status = WorkStatus(work_status)
    except ValueError:
        logger.debug("Unknown work status %r, hour buckets left unchanged", work_status)
        status = None

    hours = elapsed_hours(interval)
    if hours is not None and status is not None:
        for bucket_status, bucket in HOUR_BUCKETS.items():
            updates[bucket] = hours if bucket_status is status else 0.0

    run = meter_run(readings)
    if run is not None:
        updates["hmr_or_kmr_run"] = run

    if quantity_produced is not None and quantity_produced > 0:
        updates["production_qty"] = quantity_produced

    return base.model_copy(update=updates)


__all__ = ["HOUR_BUCKETS", "calculate_totals", "elapsed_hours", "meter_run"]
