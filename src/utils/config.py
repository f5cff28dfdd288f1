"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24
    mongo_url: str | None = None
    database_name: str = "blog"
    bcrypt_rounds: int = 12


def load_settings() -> Settings:
    """Build Settings from the process environment.

    Raises:
        ValueError: JWT_SECRET_KEY is missing or empty
    """
    secret = os.getenv("JWT_SECRET_KEY", "").strip()
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    return Settings(
        jwt_secret_key=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_expiration_hours=int(os.getenv("JWT_EXPIRATION_HOURS", "24")),
        mongo_url=os.getenv("MONGO_URL") or None,
        database_name=os.getenv("MONGODB_DATABASE", "blog"),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
    )
