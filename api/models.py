"""
API request and response models for the Inkpost REST endpoints.

These Pydantic v2 models define the HTTP transport contract. They are
intentionally separate from the dataclasses in auth/models.py and
blog/models.py, which own the internal domain representation. Route handlers
map between the two.

Wire format is camelCase (imgSrc, userId, firstName, createdAt). Python
attributes stay snake_case; the alias generator does the translation.
Request bodies accept either spelling (populate_by_name=True). FastAPI
serializes response_model output by alias.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from auth.models import User
from blog.models import Blog


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Strips surrounding whitespace. Never used for passwords.
_Stripped = Annotated[str, StringConstraints(strip_whitespace=True)]


# ---------------------------------------------------------------------------
# Auth -- requests
# ---------------------------------------------------------------------------


class RegisterRequest(_CamelModel):
    """Request body for POST /auth/register.

    email and names are whitespace-stripped; password is hashed exactly as sent.
    """

    email: _Stripped = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    # bcrypt only reads the first 72 bytes; see auth/tokens.py.
    password: str = Field(min_length=1, max_length=255)
    first_name: Optional[_Stripped] = Field(default=None, max_length=100)
    last_name: Optional[_Stripped] = Field(default=None, max_length=100)


class LoginRequest(_CamelModel):
    """Request body for POST /auth/login. password is checked exactly as sent."""

    email: _Stripped = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


# ---------------------------------------------------------------------------
# Auth -- responses
# ---------------------------------------------------------------------------


class UserResponse(_CamelModel):
    """Public user fields. The password digest is never part of this model."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.to_public())


class LoginResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    token: str


class RegisterResponse(LoginResponse):
    user: UserResponse


# ---------------------------------------------------------------------------
# Blog -- requests
# ---------------------------------------------------------------------------


class BlogCreate(_CamelModel):
    """Request body for POST /blog/createBlog.

    user_id is trusted as sent; it is not cross-checked against a token.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    img_src: Optional[str] = Field(default=None, max_length=2048)
    user_id: str = Field(min_length=1, max_length=36)


class BlogUpdate(_CamelModel):
    """Request body for PUT /blog/updateBlog. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    img_src: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value: Optional[str]) -> str:
        """title is required on a blog, so an explicit null cannot be applied."""
        if value is None:
            raise ValueError("title cannot be null")
        return value


# ---------------------------------------------------------------------------
# Blog -- responses
# ---------------------------------------------------------------------------


class AuthorResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class BlogResponse(_CamelModel):
    """A blog as returned by every blog endpoint.

    is_editable is True only when the request carried a valid token for the
    blog's owner. It is a display hint; the write endpoints re-check ownership.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str]
    img_src: Optional[str]
    user_id: str
    created_at: str
    updated_at: str
    user: Optional[AuthorResponse] = None
    is_editable: bool = False

    @classmethod
    def from_blog(cls, blog: Blog, subject_id: Optional[str] = None) -> "BlogResponse":
        """Build a BlogResponse from a domain Blog, marking ownership for subject_id."""
        author = None
        if blog.author is not None:
            author = AuthorResponse(
                id=blog.author.id,
                first_name=blog.author.first_name,
                last_name=blog.author.last_name,
            )
        return cls(
            id=blog.id,
            title=blog.title,
            description=blog.description,
            img_src=blog.img_src,
            user_id=blog.user_id,
            created_at=blog.created_at,
            updated_at=blog.updated_at,
            user=author,
            is_editable=subject_id is not None and subject_id == blog.user_id,
        )


class DeleteResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    message: str
    id: str


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
