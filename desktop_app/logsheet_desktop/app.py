"""Entry point of the desktop application."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from .api_client import ApiClient
from .config import AppConfig, configure_logging, load_config
from .errors import InvalidSessionError
from .session import SessionContext
from .widgets.account import LoginDialog
from .widgets.main_window import MainWindow

logger = logging.getLogger(__name__)


def _initial_session(config: AppConfig) -> Optional[SessionContext]:
    if not config.api_token:
        return None
    try:
        return SessionContext.from_token(config.api_token)
    except InvalidSessionError:
        logger.warning("Configured API token could not be decoded, asking for login")
        return None


def _sign_in(api_client: ApiClient) -> Optional[SessionContext]:
    dialog = LoginDialog(api_client)
    if not dialog.exec():
        return None
    return dialog.session


def main() -> None:
    """Start the Qt application."""

    config = load_config()
    configure_logging(config.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("Logsheet Desktop")

    api_client = ApiClient(config.api_base_url, session=_initial_session(config), timeout=config.request_timeout)

    while True:
        session = api_client.session or _sign_in(api_client)
        if session is None:
            break
        api_client.session = session
        window = MainWindow(api_client, session, config)
        window.show()
        window.show_home()
        app.exec()
        if api_client.session is not None:
            break

    sys.exit(0)


__all__ = ["main"]
