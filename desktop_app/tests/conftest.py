from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pytest
import requests

from logsheet_desktop.api_client import ApiClient
from logsheet_desktop.session import SessionContext


def _encode_token(payload: Dict[str, Any]) -> str:
    def _segment(data: Dict[str, Any]) -> str:
        raw = json.dumps(data).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    return f"{_segment({'alg': 'HS256', 'typ': 'JWT'})}.{_segment(payload)}.signature"


@dataclass
class FakeResponse:
    status_code: int = 200
    payload: Any = None
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.payload is not None:
            self.headers.setdefault("Content-Type", "application/json; charset=utf-8")
            self.content = json.dumps(self.payload).encode("utf-8")

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.content)


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: Dict[str, Any]


class FakeHttp:
    """Stands in for `requests.request` and replays queued responses."""

    def __init__(self) -> None:
        self.calls: List[RecordedCall] = []
        self.responses: List[FakeResponse] = []
        self.error: Optional[Exception] = None

    def queue(self, response: FakeResponse) -> None:
        self.responses.append(response)

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(RecordedCall(method, url, kwargs))
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return FakeResponse(payload={})

    @property
    def last(self) -> RecordedCall:
        return self.calls[-1]


@pytest.fixture()
def http(monkeypatch) -> FakeHttp:
    fake = FakeHttp()
    monkeypatch.setattr(requests, "request", fake)
    return fake


@pytest.fixture()
def make_token() -> Callable[[Dict[str, Any]], str]:
    return _encode_token


@pytest.fixture()
def user_token() -> str:
    return _encode_token({"email": "operator@gmail.com", "isAdmin": False})


@pytest.fixture()
def admin_token() -> str:
    return _encode_token({"email": "admin@gmail.com", "isAdmin": True})


@pytest.fixture()
def client(user_token: str) -> ApiClient:
    return ApiClient("http://api.test", session=SessionContext.from_token(user_token), timeout=5)


@pytest.fixture()
def logsheet_payload() -> Dict[str, Any]:
    return {
        "assetCode": "EX-204",
        "assetDescription": "Excavator",
        "operatorName": "R. Kumar",
        "date": "2024-03-18T00:00:00.000Z",
        "workingDetails": {
            "commenced": {"time": "08:00", "hmrOrKmrReading": "1200"},
            "completed": {"time": "16:30", "hmrOrKmrReading": "1208.5"},
            "workStatus": "working",
        },
        "productionDetails": {"activityCode": "EXC", "quantityProduced": 140, "workDone": "Trenching"},
        "totals": {
            "workingHours": 8.5,
            "idleHours": 0,
            "breakdownHours": 0,
            "productionQty": 140,
            "hmrOrKmrRun": "8.5",
            "fuelInLiters": 62.5,
        },
        "userInfo": {"userName": "R. Kumar", "userSignature": "RK"},
    }
