"""FastAPI application entry point."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Must run before settings are read from the environment
load_dotenv()

from api.routes import auth, health, users
from adapter.mongodb.connection import create_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.security.jwt_token_signer import JwtTokenSigner
from domain.model.errors import RepositoryError
from utils.config import load_settings
from utils.logging import setup_structured_logging

SERVICE_NAME = "Blog API"

setup_structured_logging(level=os.getenv("LOG_LEVEL", "INFO").upper(), service=SERVICE_NAME)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build settings, token signer and MongoDB client once, then share them via app.state."""
    settings = load_settings()
    app.state.settings = settings
    app.state.token_signer = JwtTokenSigner(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(hours=settings.jwt_expiration_hours),
    )

    client = create_mongodb_client(settings.mongo_url)
    app.state.mongo_client = client
    if client:
        if ensure_all_indexes(client[settings.database_name]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield  # App runs here

    if client:
        client.close()


app = FastAPI(
    title=SERVICE_NAME,
    description="Blog platform backend - user registration, login and user directory",
    version=VERSION,
    lifespan=lifespan,
)

# With a wildcard origin browsers refuse credentials, so only allow them for an explicit list
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError):
    logger.error("Store operation failed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


# Register routes
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
