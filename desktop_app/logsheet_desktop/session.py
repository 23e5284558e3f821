"""Session context handed explicitly to the API client and the views."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict

from .errors import InvalidSessionError

logger = logging.getLogger(__name__)

USER_DASHBOARD = "user_dashboard"
ADMIN_DASHBOARD = "admin_dashboard"


def decode_token_payload(token: str) -> Dict[str, Any]:
    """Decode the claims segment of a JWT without verifying the signature.

    Verification is the API's job; the client only reads the claims to decide
    what to show.
    """

    parts = token.split(".")
    if len(parts) < 2 or not parts[1]:
        raise InvalidSessionError("Token has no payload segment")
    segment = parts[1]
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise InvalidSessionError("Token payload could not be decoded") from exc
    if not isinstance(payload, dict):
        raise InvalidSessionError("Token payload is not an object")
    return payload


@dataclass(slots=True, frozen=True)
class SessionContext:
    token: str
    email: str = ""
    is_admin: bool = False

    @classmethod
    def from_token(cls, token: str) -> "SessionContext":
        payload = decode_token_payload(token)
        session = cls(
            token=token,
            email=str(payload.get("email") or ""),
            is_admin=bool(payload.get("isAdmin", False)),
        )
        logger.info("Session opened for %s (admin=%s)", session.email or "<unknown>", session.is_admin)
        return session

    @property
    def initials(self) -> str:
        return self.email.split("@")[0][:2].upper()

    @property
    def home_view(self) -> str:
        return ADMIN_DASHBOARD if self.is_admin else USER_DASHBOARD

    @property
    def authorization_header(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


__all__ = ["ADMIN_DASHBOARD", "SessionContext", "USER_DASHBOARD", "decode_token_payload"]
