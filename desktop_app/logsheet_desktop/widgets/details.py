"""Read-only view of a single logsheet."""

from __future__ import annotations

from typing import List, Optional, Tuple

from PySide6.QtWidgets import (QDialog, QDialogButtonBox, QFormLayout, QGroupBox,
                               QLabel, QVBoxLayout, QWidget)

from ..schemas import LogsheetData
from ..services import format_date


def _value(text: object) -> QLabel:
    label = QLabel(str(text) if text not in (None, "") else "-")
    label.setWordWrap(True)
    return label


def _group(title: str, rows: List[Tuple[str, object]]) -> QGroupBox:
    group = QGroupBox(title)
    form = QFormLayout(group)
    for caption, value in rows:
        form.addRow(caption, _value(value))
    return group


def build_logsheet_sections(data: LogsheetData) -> List[QGroupBox]:
    details = data.working_details
    production = data.production_details
    totals = data.totals
    return [
        _group(
            "Basic Information",
            [
                ("Asset Code", data.asset_code),
                ("Operator", data.operator_name),
                ("Date", format_date(data.date)),
                ("Description", data.asset_description or "No description provided"),
            ],
        ),
        _group(
            "Working Details",
            [
                ("Commenced", details.commenced.time),
                ("Commenced HMR/KMR", details.commenced.hmr_or_kmr_reading),
                ("Completed", details.completed.time),
                ("Completed HMR/KMR", details.completed.hmr_or_kmr_reading),
                ("Work Status", details.work_status.value.capitalize()),
            ],
        ),
        _group(
            "Production",
            [
                ("Activity Code", production.activity_code),
                ("Quantity Produced", production.quantity_produced),
                ("Work Done", production.work_done),
            ],
        ),
        _group(
            "Totals",
            [
                ("Working Hours", totals.working_hours),
                ("Idle Hours", totals.idle_hours),
                ("Breakdown Hours", totals.breakdown_hours),
                ("Production Qty", totals.production_qty),
                ("HMR/KMR Run", totals.hmr_or_kmr_run),
                ("Fuel (L)", totals.fuel_in_liters),
            ],
        ),
        _group(
            "User Information",
            [
                ("User Name", data.user_info.user_name),
                ("Signature", data.user_info.user_signature),
            ],
        ),
    ]


class LogsheetDetailsDialog(QDialog):
    """Shows every section of a logsheet, plus its review outcome if any."""

    def __init__(
        self,
        data: LogsheetData,
        *,
        title: str = "Logsheet Details",
        review_rows: Optional[List[Tuple[str, object]]] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.resize(520, 640)

        layout = QVBoxLayout(self)
        for section in build_logsheet_sections(data):
            layout.addWidget(section)
        if review_rows:
            layout.addWidget(_group("Review", review_rows))

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)


__all__ = ["LogsheetDetailsDialog", "build_logsheet_sections"]
