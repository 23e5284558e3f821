"""Operator dashboard: own submissions, their status and CSV export."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (QFileDialog, QGridLayout, QGroupBox, QHBoxLayout,
                               QLabel, QMessageBox, QPushButton, QTableWidget,
                               QVBoxLayout, QWidget)

from ..api_client import CSV_EXPORT_FILENAME, ApiClient, ApiError
from ..models import LogsheetStats, LogsheetStatus
from ..schemas import Logsheet
from ..services import compute_stats, format_date
from .common import configure_table, heading, readonly_item, selected_row_data, warn
from .details import LogsheetDetailsDialog

STATUS_COLORS: Dict[LogsheetStatus, str] = {
    LogsheetStatus.PENDING: "#ca8a04",
    LogsheetStatus.ACCEPTED: "#16a34a",
    LogsheetStatus.REJECTED: "#dc2626",
}


class UserDashboard(QWidget):
    """Stats cards and the table of the operator's logsheets."""

    new_logsheet_requested = Signal()

    def __init__(self, api_client: ApiClient, *, export_dir: Path, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.export_dir = export_dir
        self.logsheets: List[Logsheet] = []

        self.stat_labels = {name: QLabel("0") for name in ("total", "pending", "accepted", "rejected")}
        self.empty_label = QLabel("No logsheets submitted yet")

        self.refresh_button = QPushButton("Refresh")
        self.export_button = QPushButton("Export CSV")
        self.new_button = QPushButton("New Logsheet")
        self.details_button = QPushButton("View Details")

        self.refresh_button.clicked.connect(self.refresh)
        self.export_button.clicked.connect(self.export_csv)
        self.new_button.clicked.connect(self.new_logsheet_requested.emit)
        self.details_button.clicked.connect(self.show_details)

        self.table = QTableWidget(0, 7)
        self.table.setHorizontalHeaderLabels([
            "Asset Code",
            "Operator",
            "Date",
            "Status",
            "Submitted",
            "Reviewed By",
            "Rejection Reason",
        ])
        configure_table(self.table)
        self.table.doubleClicked.connect(lambda _index: self.show_details())

        self._build_ui()

    def _build_ui(self) -> None:
        header = QHBoxLayout()
        header.addWidget(heading("Dashboard"))
        header.addStretch(1)
        header.addWidget(self.refresh_button)
        header.addWidget(self.export_button)
        header.addWidget(self.new_button)

        stats_group = QGroupBox("Overview")
        stats_layout = QGridLayout(stats_group)
        captions = {
            "total": "Total Logsheets",
            "pending": "Pending",
            "accepted": "Accepted",
            "rejected": "Rejected",
        }
        for column, (name, caption) in enumerate(captions.items()):
            stats_layout.addWidget(QLabel(caption), 0, column)
            stats_layout.addWidget(self.stat_labels[name], 1, column)

        table_header = QHBoxLayout()
        table_header.addWidget(QLabel("Your Logsheets"))
        table_header.addStretch(1)
        table_header.addWidget(self.details_button)

        layout = QVBoxLayout(self)
        layout.addLayout(header)
        layout.addWidget(stats_group)
        layout.addLayout(table_header)
        layout.addWidget(self.empty_label)
        layout.addWidget(self.table)

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        try:
            self.logsheets = self.api_client.list_my_logsheets()
        except ApiError as exc:
            warn(self, "Failed to fetch logsheets", exc)
            return
        self._apply_stats(compute_stats(self.logsheets))
        self.empty_label.setVisible(not self.logsheets)
        self.table.setRowCount(len(self.logsheets))
        for row, logsheet in enumerate(self.logsheets):
            self._populate_row(row, logsheet)
        self.table.resizeColumnsToContents()

    def _apply_stats(self, stats: LogsheetStats) -> None:
        self.stat_labels["total"].setText(str(stats.total))
        self.stat_labels["pending"].setText(str(stats.pending))
        self.stat_labels["accepted"].setText(str(stats.accepted))
        self.stat_labels["rejected"].setText(str(stats.rejected))

    def _populate_row(self, row: int, logsheet: Logsheet) -> None:
        data = logsheet.data
        status_item = readonly_item(logsheet.status.value)
        status_item.setForeground(QColor(STATUS_COLORS[logsheet.status]))
        self.table.setItem(row, 0, readonly_item(data.asset_code, logsheet.id))
        self.table.setItem(row, 1, readonly_item(data.operator_name))
        self.table.setItem(row, 2, readonly_item(format_date(data.date)))
        self.table.setItem(row, 3, status_item)
        self.table.setItem(row, 4, readonly_item(format_date(logsheet.submitted_at)))
        self.table.setItem(row, 5, readonly_item(logsheet.reviewed_by.email if logsheet.reviewed_by else "-"))
        self.table.setItem(row, 6, readonly_item(logsheet.rejection_reason or ""))

    # ------------------------------------------------------------------
    def show_details(self) -> None:
        logsheet_id = selected_row_data(self.table)
        logsheet = next((item for item in self.logsheets if item.id == logsheet_id), None)
        if logsheet is None:
            QMessageBox.information(self, "No selection", "Please select a logsheet first.")
            return
        review_rows = [("Status", logsheet.status.value), ("Submitted", format_date(logsheet.submitted_at))]
        if logsheet.reviewed_by:
            review_rows.append(("Reviewed By", logsheet.reviewed_by.email))
        if logsheet.rejection_reason:
            review_rows.append(("Rejection Reason", logsheet.rejection_reason))
        LogsheetDetailsDialog(logsheet.data, review_rows=review_rows, parent=self).exec()

    def export_csv(self) -> None:
        default_path = str(self.export_dir / CSV_EXPORT_FILENAME)
        filename, _ = QFileDialog.getSaveFileName(self, "Export CSV", default_path, "CSV (*.csv)")
        if not filename:
            return
        target = Path(filename)
        try:
            saved = self.api_client.download_csv(target.parent, target.name)
        except ApiError as exc:
            warn(self, "Export failed", exc)
            return
        QMessageBox.information(self, "Export", f"Logsheets exported to {saved}")


__all__ = ["UserDashboard"]
