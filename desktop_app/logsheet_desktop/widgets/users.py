"""User management for administrators."""

from __future__ import annotations

from typing import List, Optional, Tuple

from PySide6.QtWidgets import (QCheckBox, QHBoxLayout, QLabel, QLineEdit,
                               QMessageBox, QPushButton, QVBoxLayout, QWidget)

from ..api_client import ApiClient
from ..errors import LogsheetError
from ..schemas import NewUser
from ..services import prepare_new_users
from .common import heading, warn


class UserManagement(QWidget):
    """Creates accounts; the API mails the credentials to each address."""

    def __init__(self, api_client: ApiClient, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.rows: List[Tuple[QWidget, QLineEdit, QCheckBox]] = []

        self.rows_layout = QVBoxLayout()
        self.add_button = QPushButton("Add Another User")
        self.create_button = QPushButton("Create Users")
        self.add_button.clicked.connect(self.add_row)
        self.create_button.clicked.connect(self.create_users)

        buttons = QHBoxLayout()
        buttons.addWidget(self.add_button)
        buttons.addStretch(1)
        buttons.addWidget(self.create_button)

        layout = QVBoxLayout(self)
        layout.addWidget(heading("Manage Users"))
        layout.addWidget(QLabel("Only Gmail addresses are supported."))
        layout.addLayout(self.rows_layout)
        layout.addLayout(buttons)
        layout.addStretch(1)

        self.add_row()

    def add_row(self) -> None:
        container = QWidget()
        email_input = QLineEdit()
        email_input.setPlaceholderText("user@gmail.com")
        admin_input = QCheckBox("Admin")
        remove_button = QPushButton("Remove")

        row_layout = QHBoxLayout(container)
        row_layout.setContentsMargins(0, 0, 0, 0)
        row_layout.addWidget(email_input, stretch=1)
        row_layout.addWidget(admin_input)
        row_layout.addWidget(remove_button)

        entry = (container, email_input, admin_input)
        remove_button.clicked.connect(lambda: self.remove_row(entry))
        self.rows.append(entry)
        self.rows_layout.addWidget(container)

    def remove_row(self, entry: Tuple[QWidget, QLineEdit, QCheckBox]) -> None:
        if len(self.rows) <= 1 or entry not in self.rows:
            return
        self.rows.remove(entry)
        entry[0].deleteLater()

    def collect(self) -> List[NewUser]:
        return [NewUser(email=email.text(), is_admin=admin.isChecked()) for _, email, admin in self.rows]

    def create_users(self) -> None:
        self.create_button.setEnabled(False)
        try:
            users = prepare_new_users(self.collect())
            self.api_client.create_users(users)
        except LogsheetError as exc:
            warn(self, "Failed to create users", exc)
            return
        finally:
            self.create_button.setEnabled(True)
        QMessageBox.information(
            self,
            "Users",
            "Users created successfully! Login credentials have been sent to their email addresses.",
        )
        for entry in list(self.rows[1:]):
            self.rows.remove(entry)
            entry[0].deleteLater()
        _, email_input, admin_input = self.rows[0]
        email_input.clear()
        admin_input.setChecked(False)


__all__ = ["UserManagement"]
