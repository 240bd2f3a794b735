from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

MIN_CREDIT_SCORE = 300
MAX_CREDIT_SCORE = 850
DEFAULT_CREDIT_SCORE = MIN_CREDIT_SCORE


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class Address:
    """Postal address embedded in a user profile."""
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


@dataclass(frozen=True)
class CreditHistoryEntry:
    """One recorded credit score change."""
    timestamp: datetime
    score: int
    note: str | None = None


# ── User Domain Model ────────────────────────────────────


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime

    password_hash: str | None = None
    phone_number: str | None = None
    date_of_birth: date | None = None
    address: Address | None = None
    credit_score: int = DEFAULT_CREDIT_SCORE
    credit_history: list[CreditHistoryEntry] = field(default_factory=list)

    def to_public(self) -> PublicUser:
        """Return the user without its password hash."""
        return PublicUser(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            created_at=self.created_at,
            updated_at=self.updated_at,
            phone_number=self.phone_number,
            date_of_birth=self.date_of_birth,
            address=self.address,
            credit_score=self.credit_score,
            credit_history=list(self.credit_history),
        )


@dataclass(frozen=True)
class PublicUser:
    """User view that is safe to return to clients."""
    id: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
    phone_number: str | None = None
    date_of_birth: date | None = None
    address: Address | None = None
    credit_score: int = DEFAULT_CREDIT_SCORE
    credit_history: list[CreditHistoryEntry] = field(default_factory=list)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def clamp_credit_score(score: int) -> int:
    return max(MIN_CREDIT_SCORE, min(MAX_CREDIT_SCORE, score))
