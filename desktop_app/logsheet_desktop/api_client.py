"""HTTP client for the logsheet API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional
from urllib.parse import urljoin

import requests

from .errors import LogsheetError
from .models import LogsheetStatus
from .schemas import (
    ChangePasswordRequest,
    CreateUsersRequest,
    LoginRequest,
    LoginResponse,
    Logsheet,
    LogsheetData,
    NewUser,
    PendingLogsheet,
    StatusUpdateRequest,
)
from .session import SessionContext

logger = logging.getLogger(__name__)

CSV_EXPORT_FILENAME = "my-logsheets.csv"


class ApiError(LogsheetError):
    """Error while talking to the API."""

    def __init__(
        self,
        message: str,
        *,
        response: Optional[requests.Response] = None,
        network: bool = False,
    ) -> None:
        super().__init__(message)
        self.response = response
        self.network = network

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


class ApiClient:
    """Wraps the HTTP calls to the logsheet API."""

    def __init__(self, base_url: str, session: Optional[SessionContext] = None, timeout: int = 15) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.session = session
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.session is not None:
            headers.update(self.session.authorization_header)
        return headers

    def _request(self, method: str, path: str, **kwargs):
        url = urljoin(self.base_url, path.lstrip("/"))
        kwargs.setdefault("timeout", self.timeout)
        headers = kwargs.setdefault("headers", {})
        headers.update(self._headers())
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(method, url, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError("Network error. Please try again.", network=True) from exc

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise ApiError(message, response=response)

        if response.headers.get("Content-Type", "").startswith("application/json"):
            return response.json()
        return response.content

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        if response.headers.get("Content-Type", "").startswith("application/json"):
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict) and data.get("error"):
                return str(data["error"])
        return f"API error {response.status_code}"

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> SessionContext:
        payload = LoginRequest(email=email, password=password).to_payload()
        data = self._request("POST", "/api/auth/login", json=payload)
        if not isinstance(data, dict):
            raise ApiError("Login response did not contain a token")
        token = LoginResponse.model_validate(data).token
        self.session = SessionContext.from_token(token)
        return self.session

    def logout(self) -> None:
        self.session = None

    def change_password(self, old_password: str, new_password: str) -> None:
        payload = ChangePasswordRequest(old_password=old_password, new_password=new_password).to_payload()
        self._request("POST", "/api/auth/change-password", json=payload)

    # ------------------------------------------------------------------
    # Logsheets
    # ------------------------------------------------------------------
    def submit_logsheet(self, data: LogsheetData) -> Any:
        result = self._request("POST", "/api/logsheet/submit", json=data.to_payload())
        logger.info("Submitted logsheet for asset %s", data.asset_code)
        return result

    def list_my_logsheets(self) -> List[Logsheet]:
        data = self._request("GET", "/api/logsheet/my-logs") or []
        return [Logsheet.model_validate(item) for item in data]

    def export_csv(self) -> bytes:
        content = self._request("GET", "/api/logsheet/export-csv")
        if isinstance(content, str):
            return content.encode("utf-8")
        return content or b""

    def download_csv(self, directory: Path, filename: str = CSV_EXPORT_FILENAME) -> Path:
        content = self.export_csv()
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / filename
        target.write_bytes(content)
        logger.info("Exported logsheets to %s", target)
        return target

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def list_pending_logsheets(self) -> List[PendingLogsheet]:
        data = self._request("GET", "/api/admin/pending-logs") or []
        return [PendingLogsheet.model_validate(item) for item in data]

    def update_logsheet_status(self, logsheet_id: str, status: str, rejection_reason: Optional[str] = None) -> None:
        status = LogsheetStatus(status).value
        payload = StatusUpdateRequest(status=status, rejection_reason=rejection_reason).to_payload(exclude_none=True)
        self._request("PUT", f"/api/admin/update-status/{logsheet_id}", json=payload)
        logger.info("Logsheet %s marked %s", logsheet_id, status)

    def create_users(self, users: Iterable[NewUser]) -> Any:
        payload = CreateUsersRequest(users=list(users)).to_payload()
        return self._request("POST", "/api/admin/users/create", json=payload)


__all__ = ["ApiClient", "ApiError", "CSV_EXPORT_FILENAME"]
