"""User directory routes.

Endpoints:
- GET /api/users/all: every user (ADMIN only)
- GET /api/users?page&pageSize: paginated listing
- GET /api/users/{id}: one user (ADMIN, USER)
- POST /api/users: create a user as given
- PUT /api/users/{id}: replace a user
- DELETE /api/users/{id}: delete a user
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_user_repo
from api.models import UserPageResponse, UserRequest, UserResponse
from api.security import get_current_user_required, require_roles
from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import Role, TokenClaims
from port.user_repository import UserRepository
from services import user_directory_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/all", response_model=list[UserResponse])
def get_all_users(
    current_user: TokenClaims = Depends(require_roles(Role.ADMIN)),
    repo: UserRepository = Depends(get_user_repo),
):
    users = user_directory_service.list_all(repo)
    return [UserResponse.from_domain(u) for u in users]


@router.get("", response_model=UserPageResponse)
def get_users(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, alias="pageSize"),
    current_user: TokenClaims = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get users with pagination, e.g. /api/users?page=2&pageSize=5."""
    try:
        result = user_directory_service.list_page(repo, page=page, page_size=page_size)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Users page retrieved", extra={
        "userId": current_user.user_id,
        "page": page,
        "pageSize": page_size,
        "totalItems": result.total_items,
    })
    return UserPageResponse.from_domain(result)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    current_user: TokenClaims = Depends(require_roles(Role.ADMIN, Role.USER)),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = user_directory_service.get_by_id(repo, user_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.from_domain(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    request: UserRequest,
    response: Response,
    current_user: TokenClaims = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Create a user. Role and password hash are stored as sent."""
    user = user_directory_service.create(repo, request.to_domain(), caller_role=current_user.role)
    response.headers["Location"] = str(router.url_path_for("get_user", user_id=user.id))
    return UserResponse.from_domain(user)


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_user(
    user_id: str,
    request: UserRequest,
    current_user: TokenClaims = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user_directory_service.update(repo, user_id, request.to_domain(), caller_role=current_user.role)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(
    user_id: str,
    current_user: TokenClaims = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        user_directory_service.delete(repo, user_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
