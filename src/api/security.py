"""Bearer-token authentication and role gate dependencies."""

import logging
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_signer
from domain.model.errors import PermissionDeniedError
from domain.model.user import Role, TokenClaims
from port.token_signer import TokenSigner

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    signer: TokenSigner = Depends(get_token_signer),
) -> TokenClaims:
    """Get the caller's token claims (required). Raises 401 if not authenticated.

    Tokens are self-contained: the store is not consulted.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = signer.verify(credentials.credentials)
    if not claims:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return claims


def check_role(claims: TokenClaims, allowed: tuple[Role, ...]) -> None:
    """Raises PermissionDeniedError unless the claims carry an allowed role."""
    if claims.role not in allowed:
        raise PermissionDeniedError(f"Role {claims.role.value} is not allowed")


def require_roles(*roles: Role) -> Callable[..., TokenClaims]:
    """Build a dependency that admits only callers holding one of ``roles``."""

    def dependency(claims: TokenClaims = Depends(get_current_user_required)) -> TokenClaims:
        try:
            check_role(claims, roles)
        except PermissionDeniedError:
            logger.info("Role check failed", extra={"userId": claims.user_id, "role": claims.role.value})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return claims

    return dependency
