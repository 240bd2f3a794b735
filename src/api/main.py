"""FastAPI application entry point."""

import logging
import os
import sys
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before anything reads settings
load_dotenv()

# main.py is at <root>/src/api/main.py; allow `python src/api/main.py`
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.error_handlers import register_error_handlers
from api.routes import auth, health, offers, users
from adapter.mongodb.connection import get_database_name, get_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from utils.logging import setup_structured_logging
from utils.settings import get_settings

setup_structured_logging(get_settings().log_level)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "CardMatch API"
API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: refuse to start without a signing secret, then ensure indexes."""
    get_settings().require_jwt_secret()

    client = get_mongodb_client()
    if client:
        if ensure_all_indexes(client[get_database_name()]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Credential lifecycle and credit-score based card recommendations",
    version=VERSION,
    lifespan=lifespan,
)

# With CORS_ORIGINS="*" credentials must stay off (browsers reject the combination)
cors_origins_env = get_settings().cors_origins
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",") if origin.strip()]
    allow_credentials = True
    logger.info("CORS configured with specific origins", extra={"origins": cors_origins})

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router, prefix=API_PREFIX)
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(users.router, prefix=API_PREFIX)
app.include_router(offers.router, prefix=API_PREFIX)


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
        access_log=False,
    )
