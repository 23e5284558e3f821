"""Login, profile and password dialogs."""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import (QDialog, QDialogButtonBox, QFormLayout, QLabel,
                               QLineEdit, QMessageBox, QVBoxLayout, QWidget)

from ..api_client import ApiClient
from ..errors import LogsheetError
from ..services import validate_password_change
from ..session import SessionContext
from .common import heading, warn


def _password_input() -> QLineEdit:
    edit = QLineEdit()
    edit.setEchoMode(QLineEdit.EchoMode.Password)
    return edit


class LoginDialog(QDialog):
    def __init__(self, api_client: ApiClient, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.session: Optional[SessionContext] = None
        self.setWindowTitle("Sign in")

        self.email_input = QLineEdit()
        self.password_input = _password_input()

        form = QFormLayout()
        form.addRow("Email", self.email_input)
        form.addRow("Password", self.password_input)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self._handle_login)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(heading("Logsheet Portal"))
        layout.addLayout(form)
        layout.addWidget(buttons)

    def _handle_login(self) -> None:
        email = self.email_input.text().strip()
        password = self.password_input.text()
        if not email or not password:
            QMessageBox.warning(self, "Sign in", "Email and password are required.")
            return
        try:
            self.session = self.api_client.login(email, password)
        except LogsheetError as exc:
            warn(self, "Sign in failed", exc)
            return
        self.accept()


class PasswordChangeDialog(QDialog):
    def __init__(self, api_client: ApiClient, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.setWindowTitle("Change Password")

        self.current_input = _password_input()
        self.new_input = _password_input()
        self.confirm_input = _password_input()

        form = QFormLayout()
        form.addRow("Current Password", self.current_input)
        form.addRow("New Password", self.new_input)
        form.addRow("Confirm New Password", self.confirm_input)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self._handle_save)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(buttons)

    def _handle_save(self) -> None:
        current = self.current_input.text()
        new = self.new_input.text()
        try:
            validate_password_change(current, new, self.confirm_input.text())
            self.api_client.change_password(current, new)
        except LogsheetError as exc:
            warn(self, "Failed to change password", exc)
            return
        QMessageBox.information(self, "Password", "Password changed successfully!")
        self.accept()


class ProfileDialog(QDialog):
    def __init__(self, session: SessionContext, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Profile")

        avatar = heading(session.initials or "?", point_size=28)
        form = QFormLayout()
        form.addRow("Email", QLabel(session.email or "-"))
        form.addRow("Role", QLabel("Administrator" if session.is_admin else "User"))

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addWidget(avatar)
        layout.addLayout(form)
        layout.addWidget(buttons)


__all__ = ["LoginDialog", "PasswordChangeDialog", "ProfileDialog"]
