"""Unit tests for the auth gate in auth/dependencies.py.

The gate is exercised directly (no HTTP) so each rejection branch can be
asserted by message: missing header, undecodable token, stale claims.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.dependencies import authenticate_header
from auth.tokens import create_access_token
from core.config import get_settings
from core.errors import Unauthenticated


class TestAuthenticateHeader:
    def test_valid_token_yields_subject(self) -> None:
        claims = authenticate_header(f"Bearer {create_access_token('user-42')}")
        assert claims.id == "user-42"
        assert claims.exp - claims.iat == 3600

    def test_scheme_is_case_insensitive(self) -> None:
        assert authenticate_header(f"bearer {create_access_token('u1')}").id == "u1"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic dXNlcjpwYXNz", "Token abc"])
    def test_missing_token(self, header) -> None:
        with pytest.raises(Unauthenticated) as exc_info:
            authenticate_header(header)
        assert exc_info.value.message == "Authentication required."
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_invalid_token(self) -> None:
        with pytest.raises(Unauthenticated) as exc_info:
            authenticate_header("Bearer not.a.token")
        assert exc_info.value.message == "Invalid token."

    def test_expired_token_with_valid_signature(self) -> None:
        past = datetime.now(timezone.utc) - timedelta(hours=1, seconds=5)
        with pytest.raises(Unauthenticated) as exc_info:
            authenticate_header(f"Bearer {create_access_token('u1', now=past)}")
        assert exc_info.value.message == "Token expired or malformed."

    def test_signed_token_without_subject(self) -> None:
        token = jwt.encode({"iat": 1, "exp": 9999999999}, get_settings().jwt_secret, algorithm="HS256")
        with pytest.raises(Unauthenticated) as exc_info:
            authenticate_header(f"Bearer {token}")
        assert exc_info.value.message == "Token expired or malformed."

    def test_gate_is_repeatable(self) -> None:
        header = f"Bearer {create_access_token('u1')}"
        assert authenticate_header(header) == authenticate_header(header)
