"""Logsheet submission form."""

from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtCore import QDate, QRegularExpression, Signal
from PySide6.QtGui import QRegularExpressionValidator
from PySide6.QtWidgets import (QComboBox, QDateEdit, QDoubleSpinBox, QFormLayout,
                               QGroupBox, QHBoxLayout, QLineEdit, QMessageBox,
                               QPushButton, QTabWidget, QTextEdit, QVBoxLayout,
                               QWidget)

from ..api_client import ApiClient
from ..errors import LogsheetError
from ..form import (LogsheetForm, ResetForm, SetBasicInfo, SetMeterReading,
                    SetProduction, SetShiftTime, SetTotal, SetUserInfo,
                    SetWorkStatus, validate_for_submission)
from ..models import WorkStatus
from ..schemas import LogsheetData
from .common import heading, warn


def _spin_box(step: float = 0.1, decimals: int = 1) -> QDoubleSpinBox:
    box = QDoubleSpinBox()
    box.setRange(0, 1_000_000)
    box.setDecimals(decimals)
    box.setSingleStep(step)
    return box


def _line_edit(placeholder: str) -> QLineEdit:
    edit = QLineEdit()
    edit.setPlaceholderText(placeholder)
    return edit


def _time_edit() -> QLineEdit:
    """24-hour HH:MM input that may stay empty."""

    edit = QLineEdit()
    edit.setInputMask("99:99")
    # unfilled mask positions are spaces while typing
    edit.setValidator(QRegularExpressionValidator(QRegularExpression(r"(?:[01 ][0-9 ]|2[0-3 ]):[0-5 ][0-9 ]")))
    return edit


class SubmitLogsheetForm(QWidget):
    """Tabbed form; the totals tab follows the working details as they change."""

    submitted = Signal()
    cancelled = Signal()

    def __init__(self, api_client: ApiClient, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.form = LogsheetForm()

        self.asset_code_input = _line_edit("Enter asset code")
        self.operator_input = _line_edit("Enter operator name")
        self.description_input = QTextEdit()
        self.description_input.setPlaceholderText("Describe the asset")
        self.date_input = QDateEdit(QDate.currentDate())
        self.date_input.setCalendarPopup(True)

        self.commenced_time_input = _time_edit()
        self.commenced_reading_input = _line_edit("Enter reading")
        self.completed_time_input = _time_edit()
        self.completed_reading_input = _line_edit("Enter reading")
        self.work_status_input = QComboBox()
        for status in WorkStatus:
            self.work_status_input.addItem(status.value.capitalize(), status)

        self.activity_code_input = _line_edit("Enter activity code")
        self.quantity_input = _spin_box(step=1, decimals=2)
        self.work_done_input = QTextEdit()
        self.work_done_input.setPlaceholderText("Describe the work done")

        self.total_inputs: Dict[str, QDoubleSpinBox] = {
            "working_hours": _spin_box(),
            "idle_hours": _spin_box(),
            "breakdown_hours": _spin_box(),
            "production_qty": _spin_box(step=1, decimals=2),
            "fuel_in_liters": _spin_box(),
        }
        self.run_input = _line_edit("Enter run value")

        self.user_name_input = _line_edit("Enter your name")
        self.signature_input = _line_edit("Enter your signature")

        self.cancel_button = QPushButton("Cancel")
        self.submit_button = QPushButton("Submit Logsheet")
        self.cancel_button.clicked.connect(self.cancelled.emit)
        self.submit_button.clicked.connect(self.submit)

        self._build_ui()
        self._connect_inputs()
        self.form.subscribe(self._apply_totals)
        self.form.dispatch(SetBasicInfo("date", self.date_input.date().toPython()))

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        tabs = QTabWidget()

        basic = QWidget()
        basic_form = QFormLayout(basic)
        basic_form.addRow("Asset Code *", self.asset_code_input)
        basic_form.addRow("Operator Name *", self.operator_input)
        basic_form.addRow("Asset Description", self.description_input)
        basic_form.addRow("Date *", self.date_input)
        tabs.addTab(basic, "Basic Info")

        working = QWidget()
        working_layout = QVBoxLayout(working)
        commenced = QGroupBox("Commenced")
        commenced_form = QFormLayout(commenced)
        commenced_form.addRow("Time", self.commenced_time_input)
        commenced_form.addRow("HMR/KMR Reading", self.commenced_reading_input)
        completed = QGroupBox("Completed")
        completed_form = QFormLayout(completed)
        completed_form.addRow("Time", self.completed_time_input)
        completed_form.addRow("HMR/KMR Reading", self.completed_reading_input)
        status_form = QFormLayout()
        status_form.addRow("Work Status", self.work_status_input)
        working_layout.addWidget(commenced)
        working_layout.addWidget(completed)
        working_layout.addLayout(status_form)
        working_layout.addStretch(1)
        tabs.addTab(working, "Working Details")

        production = QWidget()
        production_form = QFormLayout(production)
        production_form.addRow("Activity Code", self.activity_code_input)
        production_form.addRow("Quantity Produced", self.quantity_input)
        production_form.addRow("Work Done", self.work_done_input)
        tabs.addTab(production, "Production")

        totals_tab = QWidget()
        totals_layout = QVBoxLayout(totals_tab)
        totals_group = QGroupBox("Totals")
        totals_form = QFormLayout(totals_group)
        totals_form.addRow("Working Hours", self.total_inputs["working_hours"])
        totals_form.addRow("Idle Hours", self.total_inputs["idle_hours"])
        totals_form.addRow("Breakdown Hours", self.total_inputs["breakdown_hours"])
        totals_form.addRow("Production Quantity", self.total_inputs["production_qty"])
        totals_form.addRow("HMR/KMR Run", self.run_input)
        totals_form.addRow("Fuel in Liters", self.total_inputs["fuel_in_liters"])
        user_group = QGroupBox("User Information")
        user_form = QFormLayout(user_group)
        user_form.addRow("User Name *", self.user_name_input)
        user_form.addRow("Digital Signature", self.signature_input)
        totals_layout.addWidget(totals_group)
        totals_layout.addWidget(user_group)
        totals_layout.addStretch(1)
        tabs.addTab(totals_tab, "Totals && User")

        button_row = QHBoxLayout()
        button_row.addStretch(1)
        button_row.addWidget(self.cancel_button)
        button_row.addWidget(self.submit_button)

        layout = QVBoxLayout(self)
        layout.addWidget(heading("Submit Logsheet"))
        layout.addWidget(tabs)
        layout.addLayout(button_row)

    def _connect_inputs(self) -> None:
        dispatch = self.form.dispatch
        self.asset_code_input.textChanged.connect(lambda value: dispatch(SetBasicInfo("asset_code", value)))
        self.operator_input.textChanged.connect(lambda value: dispatch(SetBasicInfo("operator_name", value)))
        self.description_input.textChanged.connect(
            lambda: dispatch(SetBasicInfo("asset_description", self.description_input.toPlainText()))
        )
        self.date_input.dateChanged.connect(lambda value: dispatch(SetBasicInfo("date", value.toPython())))

        self.commenced_time_input.textChanged.connect(lambda value: dispatch(SetShiftTime("commenced", value)))
        self.completed_time_input.textChanged.connect(lambda value: dispatch(SetShiftTime("completed", value)))
        self.commenced_reading_input.textChanged.connect(
            lambda value: dispatch(SetMeterReading("commenced", value))
        )
        self.completed_reading_input.textChanged.connect(
            lambda value: dispatch(SetMeterReading("completed", value))
        )
        self.work_status_input.currentIndexChanged.connect(
            lambda _index: dispatch(SetWorkStatus(self.work_status_input.currentData()))
        )

        self.activity_code_input.textChanged.connect(lambda value: dispatch(SetProduction("activity_code", value)))
        self.quantity_input.valueChanged.connect(lambda value: dispatch(SetProduction("quantity_produced", value)))
        self.work_done_input.textChanged.connect(
            lambda: dispatch(SetProduction("work_done", self.work_done_input.toPlainText()))
        )

        for name, box in self.total_inputs.items():
            box.valueChanged.connect(lambda value, field=name: dispatch(SetTotal(field, value)))
        self.run_input.textChanged.connect(lambda value: dispatch(SetTotal("hmr_or_kmr_run", value)))

        self.user_name_input.textChanged.connect(lambda value: dispatch(SetUserInfo("user_name", value)))
        self.signature_input.textChanged.connect(lambda value: dispatch(SetUserInfo("user_signature", value)))

    # ------------------------------------------------------------------
    def _apply_totals(self, state: LogsheetData) -> None:
        totals = state.totals
        for name, box in self.total_inputs.items():
            value = getattr(totals, name)
            if box.value() != value:
                box.blockSignals(True)
                box.setValue(value)
                box.blockSignals(False)
        if self.run_input.text() != totals.hmr_or_kmr_run:
            self.run_input.blockSignals(True)
            self.run_input.setText(totals.hmr_or_kmr_run)
            self.run_input.blockSignals(False)

    def submit(self) -> None:
        try:
            validate_for_submission(self.form.state)
            self.api_client.submit_logsheet(self.form.state)
        except LogsheetError as exc:
            warn(self, "Submission failed", exc)
            return
        QMessageBox.information(self, "Logsheet", "Logsheet submitted successfully!")
        self.clear()
        self.submitted.emit()

    def _line_edits(self) -> list[QLineEdit]:
        return [
            self.asset_code_input,
            self.operator_input,
            self.commenced_time_input,
            self.commenced_reading_input,
            self.completed_time_input,
            self.completed_reading_input,
            self.activity_code_input,
            self.run_input,
            self.user_name_input,
            self.signature_input,
        ]

    def clear(self) -> None:
        for widget in self.findChildren(QWidget):
            widget.blockSignals(True)
        try:
            for edit in self._line_edits():
                edit.clear()
            for text in (self.description_input, self.work_done_input):
                text.clear()
            for box in [self.quantity_input, *self.total_inputs.values()]:
                box.setValue(0)
            self.work_status_input.setCurrentIndex(0)
            self.date_input.setDate(QDate.currentDate())
        finally:
            for widget in self.findChildren(QWidget):
                widget.blockSignals(False)
        self.form.dispatch(ResetForm())
        self.form.dispatch(SetBasicInfo("date", self.date_input.date().toPython()))


__all__ = ["SubmitLogsheetForm"]
