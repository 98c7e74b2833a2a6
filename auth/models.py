"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Stores and services do
the work; these own the domain shape.

Layer rule: no imports from api/ or blog/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered author.

    hashed_password is the bcrypt digest. It never leaves the auth layer:
    API responses are built from to_public(), which omits it.

    id is None before the record is written to the database.
    """

    email: str
    hashed_password: str
    first_name: str | None = None
    last_name: str | None = None
    id: str | None = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""

    def to_public(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }


@dataclass(frozen=True)
class TokenClaims:
    """Claims of a bearer token that passed signature AND freshness checks.

    Only auth.tokens.parse_claims() builds these, so holding a TokenClaims
    means the token was valid at the time it was checked.
    """

    id: str
    iat: int
    exp: int
