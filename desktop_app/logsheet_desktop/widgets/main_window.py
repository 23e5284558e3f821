"""Main window hosting the views of the signed-in user."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QStackedWidget, QWidget

from ..api_client import ApiClient
from ..config import AppConfig
from ..session import ADMIN_DASHBOARD, SessionContext
from .account import PasswordChangeDialog, ProfileDialog
from .admin_dashboard import AdminDashboard
from .submit_form import SubmitLogsheetForm
from .user_dashboard import UserDashboard
from .users import UserManagement

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Switches between the views available to the session's role."""

    def __init__(
        self,
        api_client: ApiClient,
        session: SessionContext,
        config: AppConfig,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.session = session
        self.setWindowTitle(f"Logsheet Portal - {session.email or 'signed in'}")
        self.resize(1100, 720)

        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)

        self.user_dashboard: Optional[UserDashboard] = None
        self.submit_form: Optional[SubmitLogsheetForm] = None
        self.admin_dashboard: Optional[AdminDashboard] = None
        self.user_management: Optional[UserManagement] = None

        if session.home_view == ADMIN_DASHBOARD:
            self.admin_dashboard = AdminDashboard(api_client)
            self.user_management = UserManagement(api_client)
            self.stack.addWidget(self.admin_dashboard)
            self.stack.addWidget(self.user_management)
        else:
            self.user_dashboard = UserDashboard(api_client, export_dir=config.export_dir)
            self.submit_form = SubmitLogsheetForm(api_client)
            self.user_dashboard.new_logsheet_requested.connect(self.show_submit_form)
            self.submit_form.submitted.connect(self.show_home)
            self.submit_form.cancelled.connect(self.show_home)
            self.stack.addWidget(self.user_dashboard)
            self.stack.addWidget(self.submit_form)

        self._build_menu()

    def _build_menu(self) -> None:
        view_menu = self.menuBar().addMenu("View")
        home_action = QAction("Dashboard", self)
        home_action.triggered.connect(self.show_home)
        view_menu.addAction(home_action)
        if self.submit_form is not None:
            submit_action = QAction("Submit Logsheet", self)
            submit_action.triggered.connect(self.show_submit_form)
            view_menu.addAction(submit_action)
        if self.user_management is not None:
            users_action = QAction("Manage Users", self)
            users_action.triggered.connect(lambda: self.stack.setCurrentWidget(self.user_management))
            view_menu.addAction(users_action)

        account_menu = self.menuBar().addMenu("Account")
        profile_action = QAction("Profile", self)
        password_action = QAction("Change Password", self)
        logout_action = QAction("Log out", self)
        profile_action.triggered.connect(lambda: ProfileDialog(self.session, parent=self).exec())
        password_action.triggered.connect(lambda: PasswordChangeDialog(self.api_client, parent=self).exec())
        logout_action.triggered.connect(self.logout)
        account_menu.addAction(profile_action)
        account_menu.addAction(password_action)
        account_menu.addSeparator()
        account_menu.addAction(logout_action)

    def show_home(self) -> None:
        home = self.admin_dashboard or self.user_dashboard
        self.stack.setCurrentWidget(home)
        home.refresh()

    def show_submit_form(self) -> None:
        if self.submit_form is not None:
            self.stack.setCurrentWidget(self.submit_form)

    def logout(self) -> None:
        logger.info("Logging out %s", self.session.email)
        self.api_client.logout()
        self.close()


__all__ = ["MainWindow"]
