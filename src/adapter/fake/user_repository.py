"""In-memory implementation of UserRepository for testing."""

import dataclasses
import uuid
from datetime import date, datetime, timezone

from domain.model.errors import DuplicateError
from domain.model.user import Address, CreditHistoryEntry, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        phone_number: str | None = None,
        date_of_birth: date | None = None,
        address: Address | None = None,
    ) -> User:
        if any(u.email == email for u in self.store.values()):
            raise DuplicateError("User already exists with this email.")

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
            phone_number=phone_number,
            date_of_birth=date_of_birth,
            address=address,
        )
        self.store[user_id] = user
        return dataclasses.replace(user, credit_history=list(user.credit_history))

    def update_credit_score(self, user_id: str, entry: CreditHistoryEntry) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        user.credit_score = entry.score
        user.credit_history.append(entry)
        user.updated_at = datetime.now(timezone.utc)
        return dataclasses.replace(user, credit_history=list(user.credit_history))

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return dataclasses.replace(user, credit_history=list(user.credit_history))
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None
        return dataclasses.replace(user, credit_history=list(user.credit_history))
