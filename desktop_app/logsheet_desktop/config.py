"""Configuration utilities for the desktop client."""

from __future__ import annotations

import logging.config
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "http://127.0.0.1:5000"
DEFAULT_REQUEST_TIMEOUT = 15
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration of the application."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: Optional[str] = None
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    export_dir: Path = field(default_factory=Path.cwd)
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(env_path: Optional[Path] = None) -> AppConfig:
    """Load the configuration, reading an optional `.env` file first."""

    if env_path is None:
        env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    export_dir = os.getenv("LOGSHEET_EXPORT_DIR")
    return AppConfig(
        api_base_url=os.getenv("LOGSHEET_API_BASE_URL", DEFAULT_API_BASE_URL),
        api_token=os.getenv("LOGSHEET_API_TOKEN") or None,
        request_timeout=int(os.getenv("LOGSHEET_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        export_dir=Path(export_dir) if export_dir else Path.cwd(),
        log_level=os.getenv("LOGSHEET_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {"format": "{levelname} {asctime} {name} {message}", "style": "{"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "simple",
                    "level": level,
                },
            },
            "loggers": {
                "logsheet_desktop": {"handlers": ["console"], "level": level, "propagate": False},
            },
        }
    )


__all__ = ["AppConfig", "configure_logging", "load_config"]
