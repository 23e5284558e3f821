"""Wire formats exchanged with the logsheet API (camelCase JSON)."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from typing_extensions import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import LogsheetStatus, WorkStatus


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self, **kwargs: Any) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, **kwargs)


class ReadingPoint(ApiModel):
    time: str = ""
    hmr_or_kmr_reading: str = ""


class WorkingDetails(ApiModel):
    commenced: ReadingPoint = Field(default_factory=ReadingPoint)
    completed: ReadingPoint = Field(default_factory=ReadingPoint)
    work_status: WorkStatus = WorkStatus.WORKING


class ProductionDetails(ApiModel):
    activity_code: str = ""
    quantity_produced: float = 0
    work_done: str = ""


class Totals(ApiModel):
    """Totals block of a logsheet. An empty `hmr_or_kmr_run` means unset."""

    working_hours: float = 0
    idle_hours: float = 0
    breakdown_hours: float = 0
    production_qty: float = 0
    hmr_or_kmr_run: str = ""
    fuel_in_liters: float = 0

    @field_validator("hmr_or_kmr_run", mode="before")
    @classmethod
    def _coerce_run(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class UserInfo(ApiModel):
    user_name: str = ""
    user_signature: str = ""


class LogsheetData(ApiModel):
    asset_code: str = ""
    asset_description: str = ""
    operator_name: str = ""
    date: Optional[dt.date] = None
    working_details: WorkingDetails = Field(default_factory=WorkingDetails)
    production_details: ProductionDetails = Field(default_factory=ProductionDetails)
    totals: Totals = Field(default_factory=Totals)
    user_info: UserInfo = Field(default_factory=UserInfo)

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time_component(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
            return value[:10]
        return value


class UserRef(ApiModel):
    id: Optional[str] = Field(default=None, alias="_id")
    email: str = ""


class Logsheet(ApiModel):
    """A logsheet as returned from `my-logs`."""

    id: str = Field(alias="_id")
    data: LogsheetData
    status: LogsheetStatus = LogsheetStatus.PENDING
    rejection_reason: Optional[str] = None
    submitted_at: dt.datetime
    reviewed_by: Optional[UserRef] = None


class PendingLogsheet(ApiModel):
    """A logsheet awaiting review, as returned to administrators."""

    id: str = Field(alias="_id")
    user_id: Optional[UserRef] = None
    data: LogsheetData
    submitted_at: dt.datetime

    @property
    def submitter_email(self) -> str:
        return self.user_id.email if self.user_id else ""


class StatusUpdateRequest(ApiModel):
    status: Literal["Accepted", "Rejected"]
    rejection_reason: Optional[str] = None


class NewUser(ApiModel):
    email: str
    is_admin: bool = False


class CreateUsersRequest(ApiModel):
    users: List[NewUser]


class ChangePasswordRequest(ApiModel):
    old_password: str
    new_password: str


class LoginRequest(ApiModel):
    email: str
    password: str


class LoginResponse(ApiModel):
    token: str


__all__ = [
    "ChangePasswordRequest",
    "CreateUsersRequest",
    "Logsheet",
    "LogsheetData",
    "LoginRequest",
    "LoginResponse",
    "NewUser",
    "PendingLogsheet",
    "ProductionDetails",
    "ReadingPoint",
    "StatusUpdateRequest",
    "Totals",
    "UserInfo",
    "UserRef",
    "WorkingDetails",
]
