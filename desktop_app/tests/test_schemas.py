from __future__ import annotations

import datetime as dt

from logsheet_desktop.models import LogsheetStatus, WorkStatus
from logsheet_desktop.schemas import LogsheetData, PendingLogsheet, Totals


def test_logsheet_data_reads_camel_case(logsheet_payload):
    data = LogsheetData.model_validate(logsheet_payload)
    assert data.asset_code == "EX-204"
    assert data.date == dt.date(2024, 3, 18)
    assert data.working_details.completed.hmr_or_kmr_reading == "1208.5"
    assert data.working_details.work_status is WorkStatus.WORKING
    assert data.production_details.quantity_produced == 140
    assert data.user_info.user_signature == "RK"


def test_payload_round_trips_to_camel_case(logsheet_payload):
    payload = LogsheetData.model_validate(logsheet_payload).to_payload()
    assert payload["date"] == "2024-03-18"
    assert payload["workingDetails"]["completed"] == {"time": "16:30", "hmrOrKmrReading": "1208.5"}
    assert payload["productionDetails"]["quantityProduced"] == 140
    assert set(payload["totals"]) == {
        "workingHours",
        "idleHours",
        "breakdownHours",
        "productionQty",
        "hmrOrKmrRun",
        "fuelInLiters",
    }


def test_blank_date_is_none():
    assert LogsheetData.model_validate({"date": ""}).date is None


def test_numeric_run_is_kept_as_text():
    assert Totals.model_validate({"hmrOrKmrRun": 45}).hmr_or_kmr_run == "45"
    assert Totals.model_validate({"hmrOrKmrRun": None}).hmr_or_kmr_run == ""


def test_pending_logsheet_exposes_submitter(logsheet_payload):
    pending = PendingLogsheet.model_validate(
        {
            "_id": "65f1",
            "userId": {"_id": "u1", "email": "operator@gmail.com"},
            "data": logsheet_payload,
            "submittedAt": "2024-03-18T17:02:11.000Z",
        }
    )
    assert pending.id == "65f1"
    assert pending.submitter_email == "operator@gmail.com"
    assert pending.submitted_at.tzinfo is not None


def test_pending_logsheet_without_user():
    pending = PendingLogsheet.model_validate(
        {"_id": "65f2", "data": {}, "submittedAt": "2024-03-18T17:02:11Z"}
    )
    assert pending.submitter_email == ""
    assert pending.data == LogsheetData()


def test_status_values_match_wire():
    assert [status.value for status in LogsheetStatus] == ["Pending", "Accepted", "Rejected"]
