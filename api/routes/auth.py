"""
api/routes/auth.py -- Registration, login, and current-user endpoints.

Routes:
  POST /auth/register  -- create account; returns {id, token, user}
  POST /auth/login     -- password login; returns {id, token}
  GET  /auth/getuser   -- current user info (requires Bearer token)

Security:
  POST /login is rate-limited per IP (Settings.login_rate_limit).
  Login goes through auth.service.login(), which keeps bcrypt timing equal
  for unknown emails and wrong passwords and returns one generic error.
  Cache-Control: no-store on every response that carries a token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from api.limiter import limiter
from api.models import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserResponse
from auth import service as auth_service
from auth.dependencies import get_current_subject
from auth.store import UserStore
from core.config import get_settings

# Auth policy:
# - POST /auth/register: public
# - POST /auth/login:    public, rate limited
# - GET  /auth/getuser:  requires auth (get_current_subject)
router = APIRouter()

_settings = get_settings()


@router.post("/auth/register", response_model=RegisterResponse)
def register(request: Request, response: Response, body: RegisterRequest) -> RegisterResponse:
    """Create a user account and return a token for it.

    Duplicate emails are a 400 (duplicate_email), other persistence failures
    a 500 with the underlying message in error.detail.
    """
    user_store: UserStore = request.app.state.user_store
    result = auth_service.register(
        user_store,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    response.headers["Cache-Control"] = "no-store"
    return RegisterResponse(id=result.id, token=result.token, user=UserResponse.from_user(result.user))


@limiter.limit(_settings.login_rate_limit)  # must be ABOVE @router so FastAPI registers the plain handler
@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, response: Response, body: LoginRequest) -> LoginResponse:
    """Authenticate with email and password; return the user ID and a token.

    Unknown email and wrong password both return 400 invalid_credentials with
    the same message.
    """
    user_store: UserStore = request.app.state.user_store
    result = auth_service.login(user_store, body.email, body.password)
    response.headers["Cache-Control"] = "no-store"
    return LoginResponse(id=result.id, token=result.token)


@router.get("/auth/getuser", response_model=UserResponse)
def get_user(request: Request, subject_id: str = Depends(get_current_subject)) -> UserResponse:
    """Return the public profile of the user the bearer token belongs to."""
    user_store: UserStore = request.app.state.user_store
    return UserResponse.from_user(auth_service.get_user(user_store, subject_id))
