from fastapi import HTTPException, Request

from adapter.mongodb.user_repository import MongoUserRepository
from port.token_signer import TokenSigner
from port.user_repository import UserRepository
from utils.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_db(request: Request):
    """Get MongoDB database, raising 503 if unavailable."""
    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[request.app.state.settings.database_name]


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_bcrypt_rounds(request: Request) -> int:
    return request.app.state.settings.bcrypt_rounds
