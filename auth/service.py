"""
auth/service.py -- Identity service: registration, login, current user.

Each function takes the UserStore explicitly and either returns a result or
raises a core.errors.AppError subclass. Route handlers stay thin: they parse
the request, call one of these, and serialize the result.

Security:
  login() goes through authenticate_user(), which runs bcrypt on every
  attempt. Unknown email and wrong password produce the same
  InvalidCredentials error -- do not split them.

Layer rule: no imports from api/ or blog/.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from auth.models import User
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token, hash_password
from core.errors import DuplicateEmail, InternalError, InvalidCredentials, NotFound

logger = logging.getLogger("inkpost.auth")


@dataclass(frozen=True)
class AuthResult:
    """A freshly issued token for a user. user is set only on registration."""

    id: str
    token: str
    user: User | None = None


def register(store: UserStore, email: str, password: str, first_name: str | None, last_name: str | None) -> AuthResult:
    """Create a user and issue a token for it.

    Raises:
        DuplicateEmail: the email is already registered.
        InternalError:  any other persistence failure (message in detail).
    """
    new_user = User(
        email=email,
        hashed_password=hash_password(password),
        first_name=first_name,
        last_name=last_name,
    )
    try:
        user_id = store.create_user(new_user)
    except IntegrityError as exc:
        logger.warning("Registration rejected: email already registered")
        raise DuplicateEmail() from exc
    except SQLAlchemyError as exc:
        logger.exception("Registration failed")
        raise InternalError("Registration failed", detail=str(exc)) from exc

    created = store.get_by_id(user_id)
    if created is None:
        raise InternalError("Registration failed", detail="User not found after write.")
    logger.info("Registered user %s", user_id)
    return AuthResult(id=user_id, token=create_access_token(user_id), user=created)


def login(store: UserStore, email: str, password: str) -> AuthResult:
    """Exchange an email/password pair for a token.

    Raises InvalidCredentials for an unknown email and for a wrong password.
    """
    user = authenticate_user(store, email, password)
    if user is None:
        logger.warning("Failed login attempt")
        raise InvalidCredentials()
    return AuthResult(id=user.id, token=create_access_token(user.id))


def get_user(store: UserStore, user_id: str) -> User:
    user = store.get_by_id(user_id)
    if user is None:
        raise NotFound("User not found")
    return user
