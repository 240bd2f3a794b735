from datetime import date
from typing import Protocol

from domain.model.user import Address, CreditHistoryEntry, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise DuplicateError when the email is already taken
    and PersistenceError when the backing store fails. A missing user is
    reported as None, never as an exception.
    """
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
        """Create a new user with the default credit score and empty history."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by (normalized) email, including the password hash."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID."""
        ...

    def update_credit_score(self, user_id: str, entry: CreditHistoryEntry) -> User | None:
        """Set credit_score to entry.score and append entry to the history in one write.

        Return the updated User or None if the user does not exist.
        """
        ...
