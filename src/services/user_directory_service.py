"""User directory service — listing, lookup and CRUD over stored users.

Role checks happen before these functions run (see api.security).
"""

import logging

from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import Role, User, UserData, UserPage
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


def _flag_admin_grant(data: UserData, caller_role: Role | None, action: str, user_id: str) -> None:
    if data.role == Role.ADMIN and caller_role != Role.ADMIN:
        logger.warning(f"Non-admin caller {action} an ADMIN account", extra={
            "userId": user_id,
            "email": data.email,
            "callerRole": caller_role.value if caller_role else None,
        })


def list_all(repo: UserRepository) -> list[User]:
    return repo.find_all()


def list_page(repo: UserRepository, page: int = 1, page_size: int = 10) -> UserPage:
    """Return one page of users in insertion order.

    A page past the end yields no items but still reports the totals.
    page_size has no upper bound.

    Raises:
        ValidationError: page or page_size below 1
    """
    if page < 1:
        raise ValidationError("page must be at least 1")
    if page_size < 1:
        raise ValidationError("pageSize must be at least 1")

    result = repo.find_many(skip=(page - 1) * page_size, limit=page_size)
    return UserPage(
        items=result.items,
        page=page,
        page_size=page_size,
        total_items=result.total,
    )


def get_by_id(repo: UserRepository, user_id: str) -> User:
    """Raises NotFoundError if no user has this id."""
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def create(repo: UserRepository, data: UserData, caller_role: Role | None = None) -> User:
    """Insert a user exactly as supplied.

    Role and password hash are stored verbatim; nothing is hashed here.
    Granting ADMIN from a non-admin session is allowed but logged.
    """
    user = repo.create(data)
    _flag_admin_grant(data, caller_role, "created", user.id)
    logger.info("User created via directory", extra={"userId": user.id, "role": user.role.value})
    return user


def update(repo: UserRepository, user_id: str, data: UserData, caller_role: Role | None = None) -> None:
    """Replace every writable field of an existing user.

    Like create, the role is stored as sent; granting ADMIN from a
    non-admin session is logged.

    Raises:
        NotFoundError: no user has this id
    """
    if not repo.replace(user_id, data):
        raise NotFoundError(f"User {user_id} not found")
    _flag_admin_grant(data, caller_role, "updated", user_id)


def delete(repo: UserRepository, user_id: str) -> None:
    """Raises NotFoundError if nothing was removed, including on repeat deletes."""
    if not repo.delete(user_id):
        raise NotFoundError(f"User {user_id} not found")
    logger.info("User deleted via directory", extra={"userId": user_id})
