# domain/model/user.py

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Roles a user can hold. Checked by the role gate on each request."""
    USER = 'USER'
    ADMIN = 'ADMIN'


@dataclass(frozen=True)
class UserData:
    """Writable fields of a user, without identity or timestamps."""
    first_name: str
    last_name: str
    email: str
    password_hash: str | None = None
    role: Role = Role.USER


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str | None = None
    role: Role = Role.USER
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_data(self) -> UserData:
        return UserData(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            password_hash=self.password_hash,
            role=self.role,
        )


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a signed session token."""
    user_id: str
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime


# ── Collections ──────────────────────────────────────────


@dataclass
class Users:
    """Collection wrapper for a slice of users plus the full collection count."""
    items: list[User]
    total: int


@dataclass
class UserPage:
    """One page of the user listing."""
    items: list[User]
    page: int
    page_size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)
