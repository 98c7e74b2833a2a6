"""
tests/test_config.py -- Settings validation.

Settings are built directly with _env_file=None so a developer's .env
cannot leak into these cases. Explicit kwargs override the DEBUG value
conftest puts in the environment.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import Settings

_GOOD_SECRET = "s" * 32


def test_missing_secret_outside_debug_refuses_to_start() -> None:
    with pytest.raises(ValidationError, match="JWT_SECRET is required"):
        Settings(_env_file=None, debug=False, jwt_secret="")


def test_debug_generates_secret() -> None:
    settings = Settings(_env_file=None, debug=True, jwt_secret="")
    assert len(settings.jwt_secret) >= 32


def test_generated_secrets_differ_per_instance() -> None:
    first = Settings(_env_file=None, debug=True, jwt_secret="")
    second = Settings(_env_file=None, debug=True, jwt_secret="")
    assert first.jwt_secret != second.jwt_secret


def test_short_secret_rejected_in_any_mode() -> None:
    for debug in (True, False):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            Settings(_env_file=None, debug=debug, jwt_secret="too-short")


def test_explicit_secret_is_kept() -> None:
    settings = Settings(_env_file=None, debug=False, jwt_secret=_GOOD_SECRET)
    assert settings.jwt_secret == _GOOD_SECRET
    assert settings.token_expire_seconds == 3600


@pytest.mark.parametrize("rounds", [3, 32])
def test_bcrypt_rounds_bounds(rounds: int) -> None:
    with pytest.raises(ValidationError, match="BCRYPT_ROUNDS"):
        Settings(_env_file=None, jwt_secret=_GOOD_SECRET, bcrypt_rounds=rounds)
