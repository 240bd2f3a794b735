"""Bearer token authentication dependencies.

The token is checked before any repository is built, so a missing or bad
token is a 401 even when the database is down.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_auth_service, get_token_issuer
from domain.model.errors import UnauthorizedError
from domain.model.user import PublicUser
from services.auth_service import AuthService
from services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Return the bearer token once its signature and expiry check out. Raises 401 otherwise."""
    if not credentials:
        raise UnauthorizedError("Not authorized, no token provided.")
    issuer.verify(credentials.credentials)
    return credentials.credentials


def get_current_user_required(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> PublicUser:
    """Resolve the bearer token to the current user. Raises 401 if not authenticated."""
    user = auth_service.resolve_token(token)
    logger.debug("Request authenticated", extra={"userId": user.id})
    return user
