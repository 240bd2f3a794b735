import logging
from functools import lru_cache

from fastapi import Depends

from adapter.mongodb.connection import get_database_name, get_mongodb_client
from adapter.mongodb.offer_repository import MongoOfferRepository
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import ConfigurationError, ServerError
from port.offer_repository import OfferRepository
from port.user_repository import UserRepository
from services.auth_service import AuthService
from services.offer_service import OfferService
from services.password_hasher import PasswordHasher
from services.token_issuer import TokenIssuer
from services.user_service import UserService
from utils.settings import get_settings

logger = logging.getLogger(__name__)


def _get_db():
    """Get MongoDB database, raising ServerError if unavailable."""
    client = get_mongodb_client()
    if client is None:
        logger.error("MongoDB unavailable, cannot serve request")
        raise ServerError("Database unavailable.")
    return client[get_database_name()]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_offer_repo() -> OfferRepository:
    return MongoOfferRepository(_get_db())


# ── process-wide, built once ─────────────────────────────


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    try:
        secret = settings.require_jwt_secret()
    except ConfigurationError as e:
        logger.error("JWT_SECRET_KEY is not defined. Cannot issue or verify tokens.")
        raise ServerError("Server configuration error.") from e
    return TokenIssuer(secret, expires_in=settings.jwt_expires_in)


# ── services ─────────────────────────────────────────────


def get_auth_service(
    repo: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(repo, hasher, issuer)


def get_user_service(repo: UserRepository = Depends(get_user_repo)) -> UserService:
    return UserService(repo)


def get_offer_service(repo: OfferRepository = Depends(get_offer_repo)) -> OfferService:
    return OfferService(repo)
