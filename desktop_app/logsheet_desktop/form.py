"""State of the logsheet submission form.

The form is changed only through the action types below. ``reduce`` is pure;
`LogsheetForm` holds the current state and notifies listeners.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Union

from pydantic import ValidationError
from typing_extensions import Literal

from .errors import FormValidationError
from .models import MeterReadingPair, WorkStatus, WorkingInterval
from .schemas import LogsheetData
from .totals import calculate_totals

logger = logging.getLogger(__name__)

BasicField = Literal["asset_code", "asset_description", "operator_name", "date"]
ShiftPoint = Literal["commenced", "completed"]
ProductionField = Literal["activity_code", "quantity_produced", "work_done"]
TotalField = Literal[
    "working_hours",
    "idle_hours",
    "breakdown_hours",
    "production_qty",
    "hmr_or_kmr_run",
    "fuel_in_liters",
]
UserInfoField = Literal["user_name", "user_signature"]

REQUIRED_FIELDS = {
    "asset_code": "Asset Code",
    "operator_name": "Operator Name",
    "date": "Date",
    "user_name": "User Name",
}


@dataclass(frozen=True)
class SetBasicInfo:
    field: BasicField
    value: Any


@dataclass(frozen=True)
class SetShiftTime:
    point: ShiftPoint
    value: str


@dataclass(frozen=True)
class SetMeterReading:
    point: ShiftPoint
    value: str


@dataclass(frozen=True)
class SetWorkStatus:
    status: WorkStatus


@dataclass(frozen=True)
class SetProduction:
    field: ProductionField
    value: Any


@dataclass(frozen=True)
class SetTotal:
    """Manual override of a totals field; does not trigger recalculation."""

    field: TotalField
    value: Any


@dataclass(frozen=True)
class SetUserInfo:
    field: UserInfoField
    value: str


@dataclass(frozen=True)
class ResetForm:
    pass


FormAction = Union[
    SetBasicInfo,
    SetShiftTime,
    SetMeterReading,
    SetWorkStatus,
    SetProduction,
    SetTotal,
    SetUserInfo,
    ResetForm,
]


def _replace(model: Any, **changes: Any) -> Any:
    # round-trip through validation so "2024-05-01" becomes a date, "3" a float
    try:
        return type(model).model_validate({**model.model_dump(), **changes})
    except ValidationError as exc:
        names = list(changes)
        raise FormValidationError(f"Invalid value for {', '.join(names)}", fields=names) from exc


def recalculate(state: LogsheetData) -> LogsheetData:
    """Re-run the totals calculator over the watched inputs of ``state``."""

    details = state.working_details
    totals = calculate_totals(
        WorkingInterval(details.commenced.time, details.completed.time),
        details.work_status,
        MeterReadingPair(details.commenced.hmr_or_kmr_reading, details.completed.hmr_or_kmr_reading),
        state.production_details.quantity_produced,
        previous=state.totals,
    )
    return state.model_copy(update={"totals": totals})


def _watches_totals(action: FormAction) -> bool:
    if isinstance(action, (SetShiftTime, SetMeterReading, SetWorkStatus)):
        return True
    return isinstance(action, SetProduction) and action.field == "quantity_produced"


def reduce(state: LogsheetData, action: FormAction) -> LogsheetData:
    """Apply ``action`` to ``state`` and return the new state."""

    if isinstance(action, ResetForm):
        return LogsheetData()
    if isinstance(action, SetBasicInfo):
        new_state = _replace(state, **{action.field: action.value})
    elif isinstance(action, (SetShiftTime, SetMeterReading)):
        key = "time" if isinstance(action, SetShiftTime) else "hmr_or_kmr_reading"
        value = action.value
        if isinstance(action, SetShiftTime) and not value.strip(" :"):
            # an untouched masked time input reads ":"
            value = ""
        details = state.working_details
        point = _replace(getattr(details, action.point), **{key: value})
        new_state = state.model_copy(
            update={"working_details": details.model_copy(update={action.point: point})}
        )
    elif isinstance(action, SetWorkStatus):
        details = _replace(state.working_details, work_status=action.status)
        new_state = state.model_copy(update={"working_details": details})
    elif isinstance(action, SetProduction):
        production = _replace(state.production_details, **{action.field: action.value})
        new_state = state.model_copy(update={"production_details": production})
    elif isinstance(action, SetTotal):
        totals = _replace(state.totals, **{action.field: action.value})
        new_state = state.model_copy(update={"totals": totals})
    elif isinstance(action, SetUserInfo):
        user_info = _replace(state.user_info, **{action.field: action.value})
        new_state = state.model_copy(update={"user_info": user_info})
    else:
        raise TypeError(f"Unsupported form action: {action!r}")

    if _watches_totals(action):
        new_state = recalculate(new_state)
    return new_state


def missing_required_fields(state: LogsheetData) -> List[str]:
    missing: List[str] = []
    for name in ("asset_code", "operator_name"):
        if not getattr(state, name).strip():
            missing.append(name)
    if state.date is None:
        missing.append("date")
    if not state.user_info.user_name.strip():
        missing.append("user_name")
    return missing


def validate_for_submission(state: LogsheetData) -> None:
    missing = missing_required_fields(state)
    if missing:
        labels = ", ".join(REQUIRED_FIELDS[name] for name in missing)
        raise FormValidationError(f"Please fill in: {labels}", fields=missing)


Listener = Callable[[LogsheetData], None]


class LogsheetForm:
    """Holds the form state and notifies listeners after every action."""

    def __init__(self, state: LogsheetData | None = None) -> None:
        self.state = state if state is not None else LogsheetData()
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, action: FormAction) -> LogsheetData:
        self.state = reduce(self.state, action)
        logger.debug("Applied %s", type(action).__name__)
        for listener in list(self._listeners):
            listener(self.state)
        return self.state

    def submission_payload(self) -> dict:
        validate_for_submission(self.state)
        return self.state.to_payload()


__all__ = [
    "FormAction",
    "LogsheetForm",
    "ResetForm",
    "SetBasicInfo",
    "SetMeterReading",
    "SetProduction",
    "SetShiftTime",
    "SetTotal",
    "SetUserInfo",
    "SetWorkStatus",
    "missing_required_fields",
    "recalculate",
    "reduce",
    "validate_for_submission",
]
