"""Page logic that does not depend on Qt."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Optional, Sequence, Union

from .api_client import ApiClient
from .errors import FormValidationError
from .models import LogsheetStats, LogsheetStatus
from .schemas import Logsheet, NewUser, PendingLogsheet

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
ALLOWED_EMAIL_DOMAIN = "@gmail.com"
DATE_DISPLAY_FORMAT = "%d/%m/%Y"


def compute_stats(logsheets: Sequence[Logsheet]) -> LogsheetStats:
    return LogsheetStats(
        total=len(logsheets),
        pending=sum(1 for item in logsheets if item.status is LogsheetStatus.PENDING),
        accepted=sum(1 for item in logsheets if item.status is LogsheetStatus.ACCEPTED),
        rejected=sum(1 for item in logsheets if item.status is LogsheetStatus.REJECTED),
    )


def format_date(value: Optional[Union[dt.date, dt.datetime]]) -> str:
    if value is None:
        return "-"
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        value = value.date()
    return value.strftime(DATE_DISPLAY_FORMAT)


def prepare_new_users(rows: Iterable[NewUser]) -> List[NewUser]:
    """Drop blank rows and check the remaining addresses.

    Raises `FormValidationError` when nothing is left or an address is not a
    Gmail address.
    """

    users = [
        NewUser(email=row.email.strip(), is_admin=row.is_admin)
        for row in rows
        if row.email.strip()
    ]
    if not users:
        raise FormValidationError("Please add at least one user email", fields=["email"])
    invalid = [user.email for user in users if ALLOWED_EMAIL_DOMAIN not in user.email]
    if invalid:
        raise FormValidationError("Only Gmail addresses are supported", fields=invalid)
    return users


def validate_password_change(current: str, new: str, confirm: str) -> None:
    if new != confirm:
        raise FormValidationError("New passwords do not match", fields=["confirm_password"])
    if len(new) < MIN_PASSWORD_LENGTH:
        raise FormValidationError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
            fields=["new_password"],
        )
    if not current:
        raise FormValidationError("Current password is required", fields=["current_password"])


class ReviewQueue:
    """Pending logsheets of the admin dashboard and the review actions on them."""

    def __init__(self, api_client: ApiClient) -> None:
        self.api_client = api_client
        self.items: List[PendingLogsheet] = []

    def refresh(self) -> List[PendingLogsheet]:
        self.items = self.api_client.list_pending_logsheets()
        return self.items

    def get(self, logsheet_id: str) -> Optional[PendingLogsheet]:
        for item in self.items:
            if item.id == logsheet_id:
                return item
        return None

    def accept(self, logsheet_id: str) -> None:
        self.api_client.update_logsheet_status(logsheet_id, LogsheetStatus.ACCEPTED)
        self._drop(logsheet_id)

    def reject(self, logsheet_id: str, reason: str) -> None:
        if not reason or not reason.strip():
            raise FormValidationError("A rejection reason is required", fields=["rejection_reason"])
        self.api_client.update_logsheet_status(logsheet_id, LogsheetStatus.REJECTED, reason.strip())
        self._drop(logsheet_id)

    def _drop(self, logsheet_id: str) -> None:
        self.items = [item for item in self.items if item.id != logsheet_id]
        logger.debug("%d logsheets left to review", len(self.items))


__all__ = [
    "ALLOWED_EMAIL_DOMAIN",
    "MIN_PASSWORD_LENGTH",
    "ReviewQueue",
    "compute_stats",
    "format_date",
    "prepare_new_users",
    "validate_password_change",
]
