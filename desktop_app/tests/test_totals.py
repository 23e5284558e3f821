from __future__ import annotations

import pytest

from logsheet_desktop.models import MeterReadingPair, WorkStatus, WorkingInterval
from logsheet_desktop.schemas import Totals
from logsheet_desktop.totals import calculate_totals, elapsed_hours, meter_run


def _totals(
    commenced: str | None = None,
    completed: str | None = None,
    status: WorkStatus | str = WorkStatus.WORKING,
    readings: tuple[str | None, str | None] = (None, None),
    quantity: float | None = 0,
    previous: Totals | None = None,
) -> Totals:
    return calculate_totals(
        WorkingInterval(commenced, completed),
        status,
        MeterReadingPair(*readings),
        quantity,
        previous=previous,
    )


def test_day_shift_books_working_hours():
    totals = _totals("08:00", "16:00", WorkStatus.WORKING)
    assert totals.working_hours == 8.0
    assert totals.idle_hours == 0
    assert totals.breakdown_hours == 0


def test_overnight_shift_wraps_to_next_day():
    totals = _totals("22:00", "06:00", WorkStatus.IDLE)
    assert totals.idle_hours == 8.0
    assert totals.working_hours == 0
    assert totals.breakdown_hours == 0


@pytest.mark.parametrize(
    ("commenced", "completed", "expected"),
    [
        ("08:00", "08:00", 0.0),
        ("08:00", "08:20", 0.3),
        ("08:00", "08:03", 0.1),
        ("08:00", "08:02", 0.0),
        ("07:15", "17:45", 10.5),
        ("23:30", "00:15", 0.8),
        ("00:01", "00:00", 24.0),
    ],
)
def test_elapsed_hours_rounds_half_up_to_one_decimal(commenced, completed, expected):
    assert elapsed_hours(WorkingInterval(commenced, completed)) == expected


@pytest.mark.parametrize("status", list(WorkStatus))
def test_exactly_one_bucket_receives_the_duration(status):
    totals = _totals("06:00", "09:30", status)
    buckets = {
        WorkStatus.WORKING: totals.working_hours,
        WorkStatus.IDLE: totals.idle_hours,
        WorkStatus.BREAKDOWN: totals.breakdown_hours,
    }
    assert buckets.pop(status) == 3.5
    assert list(buckets.values()) == [0, 0]


def test_status_change_moves_duration_between_buckets():
    first = _totals("08:00", "12:00", WorkStatus.WORKING)
    second = _totals("08:00", "12:00", WorkStatus.BREAKDOWN, previous=first)
    assert second.working_hours == 0
    assert second.breakdown_hours == 4.0


def test_status_accepts_plain_strings():
    assert _totals("08:00", "10:00", "idle").idle_hours == 2.0


@pytest.mark.parametrize(
    ("commenced", "completed"),
    [
        (None, "16:00"),
        ("08:00", None),
        ("", ""),
        ("8 am", "16:00"),
        ("08:00Z", "16:00"),
        ("08:00+01:00", "16:00"),
        ("08", "16:00"),
        ("08:", "16:00"),
        (":", "16:00"),
    ],
)
def test_missing_or_invalid_time_leaves_hour_buckets_at_zero(commenced, completed):
    totals = _totals(commenced, completed)
    assert (totals.working_hours, totals.idle_hours, totals.breakdown_hours) == (0, 0, 0)


def test_missing_time_keeps_previous_hour_buckets():
    previous = Totals(working_hours=5.5)
    totals = _totals("08:00", None, previous=previous)
    assert totals.working_hours == 5.5


def test_unknown_status_leaves_hour_buckets_unchanged():
    previous = Totals(idle_hours=1.0)
    totals = _totals("08:00", "10:00", "lunch", previous=previous)
    assert totals.idle_hours == 1.0
    assert totals.working_hours == 0


def test_meter_run_is_difference_as_text():
    assert _totals(readings=("100", "145")).hmr_or_kmr_run == "45"


@pytest.mark.parametrize(
    ("commenced", "completed", "expected"),
    [
        ("100", "100", "0"),
        ("1200", "1208.5", "8.5"),
        ("100.0", "145.0", "45"),
        (" 10 ", "30", "20"),
        ("50", "150", "100"),
    ],
)
def test_meter_run_formatting(commenced, completed, expected):
    assert meter_run(MeterReadingPair(commenced, completed)) == expected


def test_meter_rollback_derives_no_run():
    assert _totals(readings=("150", "120")).hmr_or_kmr_run == ""


def test_meter_rollback_keeps_previous_run():
    previous = Totals(hmr_or_kmr_run="12")
    assert _totals(readings=("150", "120"), previous=previous).hmr_or_kmr_run == "12"


@pytest.mark.parametrize(
    ("commenced", "completed"),
    [
        ("", "145"),
        ("100", None),
        ("abc", "145"),
        ("100", "NaN"),
        ("0", "1e1000000"),
        ("0", "1e999999"),
        ("1e-999999", "1"),
        ("-1e20", "5"),
    ],
)
def test_missing_or_non_numeric_reading_derives_no_run(commenced, completed):
    assert meter_run(MeterReadingPair(commenced, completed)) is None


def test_positive_quantity_is_copied():
    assert _totals(quantity=20).production_qty == 20


def test_zero_quantity_keeps_previous_production_qty():
    previous = _totals(quantity=20)
    totals = _totals(quantity=0, previous=previous)
    assert totals.production_qty == 20


def test_fuel_is_never_touched():
    previous = Totals(fuel_in_liters=40.5)
    totals = _totals("08:00", "16:00", readings=("1", "2"), quantity=3, previous=previous)
    assert totals.fuel_in_liters == 40.5


def test_recalculation_is_idempotent():
    previous = Totals(fuel_in_liters=12)
    first = _totals("21:10", "05:40", WorkStatus.BREAKDOWN, ("10", "18"), 7, previous)
    second = _totals("21:10", "05:40", WorkStatus.BREAKDOWN, ("10", "18"), 7, previous)
    assert first == second
    assert first.breakdown_hours == 8.5


def test_previous_totals_are_not_mutated():
    previous = Totals()
    _totals("08:00", "16:00", quantity=4, previous=previous)
    assert previous == Totals()


def test_oversized_reading_keeps_previous_run():
    previous = Totals(hmr_or_kmr_run="45")
    totals = _totals(readings=("0", "1e1000000"), previous=previous)
    assert totals.hmr_or_kmr_run == "45"
