"""Signed, time-limited session tokens (HS256 JWT).

Tokens are stateless: validity depends only on the signature and the
`exp` claim. There is no revocation list.
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from domain.model.errors import BadSignatureError, MalformedTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN = timedelta(days=1)


class TokenIssuer:
    def __init__(self, secret_key: str, expires_in: timedelta = DEFAULT_EXPIRES_IN):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.expires_in = expires_in

    def issue(self, subject_id: str) -> str:
        """Create a token binding subject_id, valid for `expires_in`."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject_id,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> str:
        """Verify a token and return its subject id.

        Raises:
            MalformedTokenError: token cannot be parsed or has no subject
            BadSignatureError: signature does not match
            TokenExpiredError: token is past its expiry
        """
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError as e:
            logger.debug("Token could not be parsed", extra={"error": str(e)})
            raise MalformedTokenError() from e

        if not isinstance(claims.get("sub"), str) or not claims["sub"]:
            raise MalformedTokenError()

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[JWT_ALGORITHM])
        except ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except JWTError as e:
            logger.debug("Token verification failed", extra={"error": str(e)})
            raise BadSignatureError() from e

        return payload["sub"]
