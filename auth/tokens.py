"""
auth/tokens.py -- JWT and password hashing utilities.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with JWT_SECRET and carry
       {id, iat, exp}. Checking a token is two separate steps:
         decode_access_token() -- signature and structure only
         is_token_valid()      -- claim presence and freshness
       Expiry is deliberately NOT enforced by jose (verify_exp=False) so the
       freshness rule lives in one pure predicate. Both return a falsy value
       on failure rather than raising; the auth gate turns that into a 401.

  Passwords: bcrypt directly, no passlib wrapper. Input is truncated to 72
       bytes (bcrypt's limit) before hashing and verifying; bcrypt 4.1+
       rejects longer inputs outright. The _DUMMY_HASH constant enables timing
       equalization in authenticate_user() so response time does not reveal
       whether an email is registered.

  JWT_SECRET: sourced from core.config.get_settings(). The Settings class
       validates the key at startup (see core/config.py).

Layer rule: no imports from api/ or blog/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from auth.models import TokenClaims
from core.config import get_settings

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("inkpost.auth")

# ---------------------------------------------------------------------------
# Config -- read once at module load via the lru_cache singleton
# ---------------------------------------------------------------------------

_settings = get_settings()

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ("id", "iat", "exp")

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:72]


def hash_password(plain: str) -> str:
    """Return a bcrypt digest of the given plaintext password."""
    salt = bcrypt.gensalt(rounds=_settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt digest."""
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Timing equalization dummy hash.
# Computed once at module load. Always call verify_password() even when the
# email does not exist -- bcrypt's work factor equalizes timing and prevents
# email enumeration via response-time differences.
_DUMMY_HASH: str = hash_password("inkpost_timing_dummy")


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(user_id: str, now: datetime | None = None) -> str:
    """Encode a signed JWT for user_id.

    Args:
        user_id: Opaque user ID, stored as the "id" claim.
        now:     Issue time. Defaults to the current UTC time; tests pass a
                 past value to mint already-expired tokens.

    iat and exp are derived from the same instant, so exp - iat is exactly
    Settings.token_expire_seconds.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=_settings.token_expire_seconds),
    }
    return jwt.encode(payload, _settings.jwt_secret, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Verify a JWT's signature and structure. Returns the payload or None.

    Expiry is not checked here -- pass the result to is_token_valid().
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            _settings.jwt_secret,
            algorithms=[_ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_token_valid(claims: Mapping | None, now: float | None = None) -> bool:
    """Return True if decoded claims are complete and not yet expired.

    False when claims is None, when id/iat/exp is missing or empty, when
    iat/exp are not numeric, or when exp <= now (seconds since the epoch).
    Pure: no I/O, no logging.
    """
    if not isinstance(claims, Mapping):
        return False
    if any(not claims.get(name) for name in _REQUIRED_CLAIMS):
        return False
    if not _is_number(claims["iat"]) or not _is_number(claims["exp"]):
        return False
    current = time.time() if now is None else now
    return claims["exp"] > current


def parse_claims(payload: Mapping | None, now: float | None = None) -> TokenClaims | None:
    """Turn a decoded payload into TokenClaims, or None if it is not valid."""
    if not is_token_valid(payload, now):
        return None
    return TokenClaims(id=str(payload["id"]), iat=int(payload["iat"]), exp=int(payload["exp"]))


# ---------------------------------------------------------------------------
# User authentication (constant-time)
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, email: str, password: str) -> User | None:
    """Check an email/password pair with timing equalization.

    Always runs bcrypt whether or not the user exists:
    - Unknown email: bcrypt runs against _DUMMY_HASH (same cost as real check)
    - Wrong password: bcrypt runs against the real hash (same cost)

    Returns the User on success, None on any failure.
    """
    user = store.get_by_email(email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user
