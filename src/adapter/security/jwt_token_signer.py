"""python-jose implementation of TokenSigner (HMAC-signed JWTs)."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.user import Role, TokenClaims, User

logger = logging.getLogger(__name__)


class JwtTokenSigner:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(hours=24)):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, user: User) -> str:
        """Create JWT access token for user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims | None:
        """Verify JWT token and extract its claims."""
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or email is None or "exp" not in payload or "iat" not in payload:
            return None

        try:
            role = Role(payload.get("role"))
        except ValueError:
            logger.debug("JWT carries unknown role", extra={"userId": user_id})
            return None

        return TokenClaims(
            user_id=user_id,
            email=email,
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], timezone.utc),
        )
