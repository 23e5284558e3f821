from __future__ import annotations

import pytest
import requests

from logsheet_desktop.api_client import CSV_EXPORT_FILENAME, ApiClient, ApiError
from logsheet_desktop.models import LogsheetStatus
from logsheet_desktop.schemas import LogsheetData, NewUser

from .conftest import FakeResponse


def test_requests_carry_bearer_token_and_timeout(http, client, user_token):
    http.queue(FakeResponse(payload=[]))
    client.list_my_logsheets()
    call = http.last
    assert call.method == "GET"
    assert call.url == "http://api.test/api/logsheet/my-logs"
    assert call.kwargs["headers"]["Authorization"] == f"Bearer {user_token}"
    assert call.kwargs["timeout"] == 5


def test_anonymous_client_sends_no_authorization(http):
    ApiClient("http://api.test/").list_pending_logsheets()
    assert "Authorization" not in http.last.kwargs["headers"]


def test_list_my_logsheets_parses_wire_format(http, client, logsheet_payload):
    http.queue(
        FakeResponse(
            payload=[
                {
                    "_id": "65f1",
                    "data": logsheet_payload,
                    "status": "Rejected",
                    "rejectionReason": "Fuel missing",
                    "submittedAt": "2024-03-18T17:02:11.000Z",
                    "reviewedBy": {"_id": "a1", "email": "admin@gmail.com"},
                }
            ]
        )
    )
    [logsheet] = client.list_my_logsheets()
    assert logsheet.id == "65f1"
    assert logsheet.status is LogsheetStatus.REJECTED
    assert logsheet.rejection_reason == "Fuel missing"
    assert logsheet.reviewed_by.email == "admin@gmail.com"
    assert logsheet.data.totals.hmr_or_kmr_run == "8.5"


def test_submit_logsheet_posts_camel_case_body(http, client, logsheet_payload):
    data = LogsheetData.model_validate(logsheet_payload)
    http.queue(FakeResponse(status_code=201, payload={"message": "Logsheet submitted"}))
    result = client.submit_logsheet(data)
    assert result == {"message": "Logsheet submitted"}
    body = http.last.kwargs["json"]
    assert http.last.method == "POST"
    assert http.last.url.endswith("/api/logsheet/submit")
    assert body["assetCode"] == "EX-204"
    assert body["date"] == "2024-03-18"
    assert body["totals"]["fuelInLiters"] == 62.5


def test_error_field_becomes_message(http, client):
    http.queue(FakeResponse(status_code=403, payload={"error": "Admins only"}))
    with pytest.raises(ApiError) as excinfo:
        client.list_pending_logsheets()
    assert str(excinfo.value) == "Admins only"
    assert excinfo.value.status_code == 403
    assert excinfo.value.network is False


def test_error_without_body_uses_status_code(http, client):
    http.queue(FakeResponse(status_code=500, content=b"<html>oops</html>", headers={"Content-Type": "text/html"}))
    with pytest.raises(ApiError, match="API error 500"):
        client.list_my_logsheets()


def test_network_failure_is_reported_as_network_error(http, client):
    http.error = requests.ConnectionError("connection refused")
    with pytest.raises(ApiError) as excinfo:
        client.list_my_logsheets()
    assert excinfo.value.network is True
    assert excinfo.value.status_code is None
    assert str(excinfo.value) == "Network error. Please try again."


def test_login_opens_session(http, admin_token):
    client = ApiClient("http://api.test")
    http.queue(FakeResponse(payload={"token": admin_token}))
    session = client.login("admin@gmail.com", "secret1")
    assert http.last.kwargs["json"] == {"email": "admin@gmail.com", "password": "secret1"}
    assert session.is_admin is True
    assert client.session is session


def test_logout_drops_session(client):
    client.logout()
    assert client.session is None


def test_change_password_body(http, client):
    client.change_password("old-pass", "new-pass")
    assert http.last.url.endswith("/api/auth/change-password")
    assert http.last.kwargs["json"] == {"oldPassword": "old-pass", "newPassword": "new-pass"}


def test_download_csv_writes_file(http, client, tmp_path):
    http.queue(FakeResponse(content=b"Asset Code,Date\r\nEX-204,2024-03-18\r\n", headers={"Content-Type": "text/csv"}))
    target = client.download_csv(tmp_path / "exports")
    assert target == tmp_path / "exports" / CSV_EXPORT_FILENAME
    assert target.read_bytes().startswith(b"Asset Code,Date")
    assert http.last.url.endswith("/api/logsheet/export-csv")


def test_accept_sends_status_without_reason(http, client):
    client.update_logsheet_status("65f1", LogsheetStatus.ACCEPTED)
    assert http.last.method == "PUT"
    assert http.last.url == "http://api.test/api/admin/update-status/65f1"
    assert http.last.kwargs["json"] == {"status": "Accepted"}


def test_reject_sends_reason(http, client):
    client.update_logsheet_status("65f1", "Rejected", "Wrong asset")
    assert http.last.kwargs["json"] == {"status": "Rejected", "rejectionReason": "Wrong asset"}


def test_pending_status_cannot_be_sent(http, client):
    with pytest.raises(ValueError):
        client.update_logsheet_status("65f1", LogsheetStatus.PENDING)
    assert http.calls == []


def test_create_users_body(http, client):
    http.queue(FakeResponse(status_code=201, payload={"created": 2}))
    client.create_users([NewUser(email="a@gmail.com"), NewUser(email="b@gmail.com", is_admin=True)])
    assert http.last.kwargs["json"] == {
        "users": [
            {"email": "a@gmail.com", "isAdmin": False},
            {"email": "b@gmail.com", "isAdmin": True},
        ]
    }
