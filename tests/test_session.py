"""Tests for session token extraction."""

import pytest

from pokeadmin.api.session import extract_token, require_token
from pokeadmin.models.failure import UnauthorizedError


class TestExtractToken:
    def test_bearer_header_wins(self) -> None:
        token = extract_token(
            authorization="Bearer header-tok",
            session_token="cookie-tok",
            password_access_token="pw-tok",
        )

        assert token == "header-tok"

    def test_session_cookie_before_password_cookie(self) -> None:
        token = extract_token(
            authorization=None, session_token="cookie-tok", password_access_token="pw-tok"
        )

        assert token == "cookie-tok"

    def test_password_cookie(self) -> None:
        token = extract_token(authorization=None, session_token=None, password_access_token="pw")

        assert token == "pw"

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer ", "bearer-ish"])
    def test_non_bearer_header_ignored(self, header: str) -> None:
        token = extract_token(authorization=header, session_token="cookie-tok")

        assert token == "cookie-tok"

    def test_nothing_present(self) -> None:
        token = extract_token(authorization=None, session_token="", password_access_token=None)

        assert token is None


class TestRequireToken:
    def test_returns_token(self) -> None:
        assert require_token("tok") == "tok"

    def test_missing_token_is_401(self) -> None:
        with pytest.raises(UnauthorizedError) as exc_info:
            require_token(None)

        assert exc_info.value.status_code == 401
