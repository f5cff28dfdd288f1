"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.model.user import Role, User, UserData, UserPage


class CamelModel(BaseModel):
    """Base model exposing camelCase names on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── auth ─────────────────────────────────────────────────


class RegisterRequest(CamelModel):
    """Request model for user registration.

    The email is checked for shape but kept exactly as sent, so lookups
    match addresses stored through the directory byte for byte.
    """
    first_name: str
    last_name: str
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email_format(cls, v: str) -> str:
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return v


class LoginRequest(CamelModel):
    """Request model for user login. Malformed emails fail as invalid credentials."""
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


# ── users ────────────────────────────────────────────────


class UserRequest(CamelModel):
    """Request body for creating or replacing a user.

    An ``id`` in the body is accepted and ignored; the store assigns ids.
    """
    id: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    password_hash: Optional[str] = None
    role: Role = Role.USER

    def to_domain(self) -> UserData:
        return UserData(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            password_hash=self.password_hash,
            role=self.role,
        )


class UserResponse(CamelModel):
    """Response model for a user. The password hash is never returned."""
    id: str = Field(..., description="User ID")
    first_name: str
    last_name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserPageResponse(CamelModel):
    """Response model for the paginated user list."""
    total_items: int = Field(..., description="Total number of users")
    page: int
    page_size: int
    total_pages: int
    items: list[UserResponse]

    @classmethod
    def from_domain(cls, page: UserPage) -> "UserPageResponse":
        return cls(
            total_items=page.total_items,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            items=[UserResponse.from_domain(u) for u in page.items],
        )
