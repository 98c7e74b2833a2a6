"""
auth/dependencies.py -- The auth gate and its FastAPI Depends() helpers.

A request authenticates with exactly one method:
  Authorization: Bearer <token> -- a JWT issued by /auth/register or /auth/login.

authenticate_header() is the gate itself and knows nothing about FastAPI:
  1. no header / not a Bearer header / empty token -> Unauthenticated
  2. signature or structure check fails            -> Unauthenticated
  3. claims incomplete or expired                  -> Unauthenticated
  4. otherwise                                     -> TokenClaims

get_current_subject() wraps it for routes that require auth (HTTP 401).
try_get_current_subject() is the soft variant (returns None on failure),
used by public read routes to compute isEditable.

The gate is read-only: no store lookups, no writes, safe to run any number
of times per request.

Layer rule: no imports from api/ or blog/.
  This module may import from fastapi (for Request) because it is part of
  the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import TokenClaims
from auth.tokens import decode_access_token, parse_claims
from core.errors import Unauthenticated


def _bearer_token(header_value: str | None) -> str | None:
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authenticate_header(header_value: str | None) -> TokenClaims:
    """Validate an Authorization header value and return its claims.

    Raises Unauthenticated on every failure path.
    """
    token = _bearer_token(header_value)
    if token is None:
        raise Unauthenticated("Authentication required.")

    payload = decode_access_token(token)
    if payload is None:
        raise Unauthenticated("Invalid token.")

    claims = parse_claims(payload)
    if claims is None:
        raise Unauthenticated("Token expired or malformed.")
    return claims


def get_current_subject(request: Request) -> str:
    """Require a valid bearer token. Returns the subject (user) ID.

    Use as a FastAPI dependency:
        @router.put("/protected")
        def route(subject_id: str = Depends(get_current_subject)): ...
    """
    return authenticate_header(request.headers.get("Authorization")).id


def try_get_current_subject(request: Request) -> str | None:
    """Return the subject ID if the request carries a valid token, else None.

    Never raises -- callers that need a hard 401 should use get_current_subject().
    """
    try:
        return get_current_subject(request)
    except Unauthenticated:
        return None
