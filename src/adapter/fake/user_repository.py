"""In-memory implementation of UserRepository for testing."""

import uuid
from copy import copy
from datetime import datetime, timezone

from domain.model.user import User, UserData, Users


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, data: UserData) -> User:
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            password_hash=data.password_hash,
            role=data.role,
            created_at=now,
            updated_at=now,
        )
        self.store[user_id] = user
        return copy(user)

    def replace(self, user_id: str, data: UserData) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        self.store[user_id] = User(
            id=user_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            password_hash=data.password_hash,
            role=data.role,
            created_at=user.created_at,
            updated_at=datetime.now(timezone.utc),
        )
        return True

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return copy(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return copy(user) if user else None

    def find_all(self) -> list[User]:
        return [copy(u) for u in self._ordered()]

    def find_many(self, skip: int = 0, limit: int = 10) -> Users:
        ordered = self._ordered()
        return Users(
            items=[copy(u) for u in ordered[skip:skip + limit]],
            total=len(ordered),
        )

    def _ordered(self) -> list[User]:
        # dict keeps insertion order; sorted() is stable on created_at ties
        return sorted(self.store.values(), key=lambda u: u.created_at)
