"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_bcrypt_rounds, get_token_signer, get_user_repo
from api.models import LoginRequest, RegisterRequest, TokenResponse
from domain.model.errors import AuthenticationError, DuplicateError, ValidationError
from port.token_signer import TokenSigner
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, response_class=Response)
def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    rounds: int = Depends(get_bcrypt_rounds),
):
    """Register a new user. Returns 201 with an empty body.

    Raises:
        HTTPException: 400 if the email is already registered or the password is rejected
    """
    try:
        auth_service.register(
            repo,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
            rounds=rounds,
        )
    except (DuplicateError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    try:
        token = auth_service.authenticate(repo, signer, request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return TokenResponse(token=token)
