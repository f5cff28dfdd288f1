"""Auth service — registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

import bcrypt

from domain.model.errors import AuthenticationError, DuplicateError, ValidationError
from domain.model.user import Role, User, UserData
from port.token_signer import TokenSigner
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

INVALID_CREDENTIALS = "Invalid credentials."


def _hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str | None) -> bool:
    encoded = plain.encode("utf-8")
    if not hashed or len(encoded) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash (e.g. written through direct create)
        return False


def _validate_password(password: str) -> None:
    if not password.strip():
        raise ValidationError("Password must not be empty")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")


def register(
    repo: UserRepository,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    rounds: int = BCRYPT_ROUNDS,
) -> User:
    """Register a new user with the USER role.

    No token is issued; the caller has to log in separately.

    Raises:
        DuplicateError: email already registered
        ValidationError: password is blank or too long to hash
    """
    if repo.get_by_email(email):
        raise DuplicateError("User already exists.")

    _validate_password(password)

    user = repo.create(UserData(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=_hash_password(password, rounds),
        role=Role.USER,
    ))

    logger.info("User registered", extra={"userId": user.id, "email": email})
    return user


def authenticate(repo: UserRepository, signer: TokenSigner, email: str, password: str) -> str:
    """Verify credentials and return a signed session token.

    Unknown email and wrong password fail with the same error so callers
    cannot tell which accounts exist.

    Raises:
        AuthenticationError: invalid credentials
    """
    user = repo.get_by_email(email)
    if not user or not _verify_password(password, user.password_hash):
        logger.info("Login rejected", extra={"email": email})
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = signer.issue(user)
    logger.info("User logged in", extra={"userId": user.id, "email": email})
    return token
