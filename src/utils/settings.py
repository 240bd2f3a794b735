"""Process configuration read from environment variables.

Values are read once and cached; `.env` files are loaded by the API
entry point via python-dotenv before the first call.
"""

import os
import re
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from domain.model.errors import ConfigurationError

DEFAULT_JWT_EXPIRES_IN = '1d'
DEFAULT_BCRYPT_ROUNDS = 10

_DURATION_RE = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')
_DURATION_UNITS = {
    '': 'seconds',
    's': 'seconds',
    'm': 'minutes',
    'h': 'hours',
    'd': 'days',
}


def parse_duration(value: str) -> timedelta:
    """Parse '1d', '12h', '30m', '45s' or a bare number of seconds."""
    match = _DURATION_RE.match(value)
    if not match:
        raise ConfigurationError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str | None
    jwt_expires_in: timedelta
    bcrypt_rounds: int
    mongo_url: str | None
    mongodb_database: str
    app_env: str
    cors_origins: str
    log_level: str

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == 'development'

    def require_jwt_secret(self) -> str:
        """Return the signing secret or fail; the service must not run without it."""
        if not self.jwt_secret_key:
            raise ConfigurationError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        return self.jwt_secret_key


@lru_cache
def get_settings() -> Settings:
    try:
        bcrypt_rounds = int(os.getenv('BCRYPT_ROUNDS', DEFAULT_BCRYPT_ROUNDS))
    except ValueError as e:
        raise ConfigurationError("BCRYPT_ROUNDS must be an integer") from e

    return Settings(
        jwt_secret_key=os.getenv('JWT_SECRET_KEY') or None,
        jwt_expires_in=parse_duration(os.getenv('JWT_EXPIRES_IN', DEFAULT_JWT_EXPIRES_IN)),
        bcrypt_rounds=bcrypt_rounds,
        mongo_url=os.getenv('MONGO_URL'),
        mongodb_database=os.getenv('MONGODB_DATABASE', 'cardmatch'),
        app_env=os.getenv('APP_ENV', 'production'),
        cors_origins=os.getenv('CORS_ORIGINS', '*'),
        log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    )
