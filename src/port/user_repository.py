"""Port definition for UserRepository."""

from typing import Protocol

from domain.model.user import User, UserData, Users


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Listing methods return users in insertion order (created_at, then id).
    """
    def create(self, data: UserData) -> User:
        """Insert a new user, assigning its id and timestamps."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by exact email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def find_all(self) -> list[User]:
        """Return every stored user."""
        ...

    def find_many(self, skip: int = 0, limit: int = 10) -> Users:
        """Return a slice of users together with the full collection count."""
        ...

    def replace(self, user_id: str, data: UserData) -> bool:
        """Overwrite every writable field of a user. Return False if no user matched."""
        ...

    def delete(self, user_id: str) -> bool:
        """Remove a user. Return False if nothing was removed."""
        ...
