from __future__ import annotations

import pytest

from logsheet_desktop.errors import InvalidSessionError
from logsheet_desktop.session import ADMIN_DASHBOARD, USER_DASHBOARD, SessionContext


def test_user_token_opens_user_dashboard(user_token: str):
    session = SessionContext.from_token(user_token)
    assert session.email == "operator@gmail.com"
    assert session.is_admin is False
    assert session.home_view == USER_DASHBOARD
    assert session.initials == "OP"


def test_admin_token_opens_admin_dashboard(admin_token: str):
    session = SessionContext.from_token(admin_token)
    assert session.is_admin is True
    assert session.home_view == ADMIN_DASHBOARD


def test_missing_claims_default_to_plain_user(make_token):
    session = SessionContext.from_token(make_token({"sub": "42"}))
    assert session.email == ""
    assert session.is_admin is False
    assert session.initials == ""


def test_authorization_header_carries_token(user_token: str):
    session = SessionContext.from_token(user_token)
    assert session.authorization_header == {"Authorization": f"Bearer {user_token}"}


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.!!!.c", "a.bm90LWpzb24.c", "a.WzEsMl0.c"])
def test_malformed_tokens_are_rejected(token: str):
    with pytest.raises(InvalidSessionError):
        SessionContext.from_token(token)
