"""Auth service: registration, login and token resolution.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API layer maps to HTTP responses.
"""

import logging
from dataclasses import dataclass
from datetime import date

from domain.model.errors import (
    DomainError,
    DuplicateError,
    InvalidCredentialsError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from domain.model.user import Address, PublicUser, normalize_email
from port.user_repository import UserRepository
from services.password_hasher import MAX_PASSWORD_BYTES, PasswordHasher
from services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: PublicUser


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class AuthService:
    def __init__(self, repo: UserRepository, hasher: PasswordHasher, issuer: TokenIssuer):
        self.repo = repo
        self.hasher = hasher
        self.issuer = issuer

    def register(
        self,
        email: str | None,
        password: str | None,
        first_name: str | None,
        last_name: str | None,
        phone_number: str | None = None,
        date_of_birth: date | None = None,
        address: Address | None = None,
    ) -> AuthResult:
        """Register a new user and issue a token for it.

        Raises:
            ValidationError: a required field is missing or the password is too long
            DuplicateError: email already registered
            ServerError: persistence failed
        """
        if _is_blank(email) or not password or _is_blank(first_name) or _is_blank(last_name):
            raise ValidationError("Please provide email, password, first name, and last name.")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")

        email = normalize_email(email)
        try:
            if self.repo.get_by_email(email):
                raise DuplicateError("User already exists with this email.")

            user = self.repo.create(
                email=email,
                password_hash=self.hasher.hash(password),
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                phone_number=phone_number,
                date_of_birth=date_of_birth,
                address=address,
            )
        except DomainError:
            raise
        except Exception as e:
            logger.exception("Registration failed", extra={"email": email})
            raise ServerError("Server error during registration.") from e

        logger.info("User registered", extra={"userId": user.id, "email": email})
        return AuthResult(token=self.issuer.issue(user.id), user=user.to_public())

    def login(self, email: str | None, password: str | None) -> AuthResult:
        """Authenticate by email and password.

        Unknown email and wrong password raise the same error.

        Raises:
            ValidationError: email or password missing
            InvalidCredentialsError: credentials do not match a user
            ServerError: persistence failed
        """
        if _is_blank(email) or not password:
            raise ValidationError("Please provide email and password.")

        email = normalize_email(email)
        try:
            user = self.repo.get_by_email(email)
        except Exception as e:
            logger.exception("Login lookup failed", extra={"email": email})
            raise ServerError("Server error during login.") from e

        if not user or not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected", extra={"email": email})
            raise InvalidCredentialsError("Invalid credentials.")

        logger.info("User logged in", extra={"userId": user.id})
        return AuthResult(token=self.issuer.issue(user.id), user=user.to_public())

    def resolve_token(self, token: str | None) -> PublicUser:
        """Resolve a bearer token to the user it was issued for.

        Raises:
            UnauthorizedError: token missing, invalid, expired, or user gone
            ServerError: persistence failed
        """
        if _is_blank(token):
            raise UnauthorizedError("Not authorized, no token provided.")

        user_id = self.issuer.verify(token)
        try:
            user = self.repo.get_by_id(user_id)
        except Exception as e:
            logger.exception("Token user lookup failed", extra={"userId": user_id})
            raise ServerError("Server error during token verification.") from e

        if not user:
            raise UnauthorizedError("Not authorized, user not found.")
        return user.to_public()
