"""Administrator dashboard: review pending logsheets."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (QDialog, QHBoxLayout, QInputDialog, QLabel,
                               QMessageBox, QPushButton, QTableWidget,
                               QVBoxLayout, QWidget)

from ..api_client import ApiClient, ApiError
from ..errors import LogsheetError
from ..schemas import PendingLogsheet
from ..services import ReviewQueue, format_date
from .common import configure_table, heading, readonly_item, selected_row_data, warn
from .details import build_logsheet_sections


class ReviewDialog(QDialog):
    """Shows a pending logsheet with accept and reject actions."""

    reviewed = Signal(str)

    def __init__(self, queue: ReviewQueue, logsheet: PendingLogsheet, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.queue = queue
        self.logsheet = logsheet
        self.setWindowTitle(f"Review {logsheet.data.asset_code}")
        self.resize(520, 680)

        self.accept_button = QPushButton("Accept")
        self.reject_button = QPushButton("Reject")
        self.close_button = QPushButton("Close")
        self.accept_button.clicked.connect(self._handle_accept)
        self.reject_button.clicked.connect(self._handle_reject)
        self.close_button.clicked.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f"Submitted by {logsheet.submitter_email or '-'} on {format_date(logsheet.submitted_at)}"))
        for section in build_logsheet_sections(logsheet.data):
            layout.addWidget(section)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(self.close_button)
        buttons.addWidget(self.reject_button)
        buttons.addWidget(self.accept_button)
        layout.addLayout(buttons)

    def _set_busy(self, busy: bool) -> None:
        self.accept_button.setEnabled(not busy)
        self.reject_button.setEnabled(not busy)

    def _handle_accept(self) -> None:
        self._set_busy(True)
        try:
            self.queue.accept(self.logsheet.id)
        except ApiError as exc:
            warn(self, "Failed to update logsheet status", exc)
            self._set_busy(False)
            return
        self.reviewed.emit(self.logsheet.id)
        self.accept()

    def _handle_reject(self) -> None:
        reason, ok = QInputDialog.getMultiLineText(
            self,
            "Reject Logsheet",
            "Please provide a reason for rejecting this logsheet:",
        )
        if not ok:
            return
        self._set_busy(True)
        try:
            self.queue.reject(self.logsheet.id, reason)
        except LogsheetError as exc:
            warn(self, "Failed to update logsheet status", exc)
            self._set_busy(False)
            return
        self.reviewed.emit(self.logsheet.id)
        self.accept()


class AdminDashboard(QWidget):
    """Table of pending logsheets with the review dialog."""

    def __init__(self, api_client: ApiClient, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.queue = ReviewQueue(api_client)

        self.pending_label = QLabel("0")
        self.empty_label = QLabel("No pending logsheets")
        self.refresh_button = QPushButton("Refresh")
        self.review_button = QPushButton("Review")
        self.refresh_button.clicked.connect(self.refresh)
        self.review_button.clicked.connect(self.open_review)

        self.table = QTableWidget(0, 5)
        self.table.setHorizontalHeaderLabels(["Asset Code", "Operator", "Submitted By", "Date", "Submitted"])
        configure_table(self.table)
        self.table.doubleClicked.connect(lambda _index: self.open_review())

        header = QHBoxLayout()
        header.addWidget(heading("Admin Dashboard"))
        header.addStretch(1)
        header.addWidget(self.refresh_button)
        header.addWidget(self.review_button)

        pending_row = QHBoxLayout()
        pending_row.addWidget(QLabel("Pending Reviews:"))
        pending_row.addWidget(self.pending_label)
        pending_row.addStretch(1)

        layout = QVBoxLayout(self)
        layout.addLayout(header)
        layout.addLayout(pending_row)
        layout.addWidget(self.empty_label)
        layout.addWidget(self.table)

    def refresh(self) -> None:
        try:
            self.queue.refresh()
        except ApiError as exc:
            warn(self, "Failed to fetch pending logsheets", exc)
            return
        self._render()

    def _render(self) -> None:
        items = self.queue.items
        self.pending_label.setText(str(len(items)))
        self.empty_label.setVisible(not items)
        self.table.setRowCount(len(items))
        for row, item in enumerate(items):
            self.table.setItem(row, 0, readonly_item(item.data.asset_code, item.id))
            self.table.setItem(row, 1, readonly_item(item.data.operator_name))
            self.table.setItem(row, 2, readonly_item(item.submitter_email or "-"))
            self.table.setItem(row, 3, readonly_item(format_date(item.data.date)))
            self.table.setItem(row, 4, readonly_item(format_date(item.submitted_at)))
        self.table.resizeColumnsToContents()

    def open_review(self) -> None:
        logsheet_id = selected_row_data(self.table)
        logsheet = self.queue.get(logsheet_id) if logsheet_id else None
        if logsheet is None:
            QMessageBox.information(self, "No selection", "Please select a logsheet first.")
            return
        dialog = ReviewDialog(self.queue, logsheet, parent=self)
        dialog.reviewed.connect(lambda _id: self._render())
        dialog.exec()


__all__ = ["AdminDashboard", "ReviewDialog"]
