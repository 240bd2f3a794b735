"""User profile and simulated credit score updates."""

import logging
import random
from datetime import datetime, timezone

from domain.model.errors import DomainError, NotFoundError, ServerError
from domain.model.user import CreditHistoryEntry, PublicUser, clamp_credit_score
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MAX_SCORE_CHANGE = 25


def format_score_change_note(change: int) -> str:
    sign = '+' if change > 0 else ''
    return f"Simulated score update. Change: {sign}{change}"


class UserService:
    def __init__(self, repo: UserRepository, rng: random.Random | None = None):
        self.repo = repo
        self.rng = rng or random.Random()

    def get_profile(self, user_id: str) -> PublicUser:
        """Raises NotFoundError if the user does not exist."""
        try:
            user = self.repo.get_by_id(user_id)
        except Exception as e:
            logger.exception("Failed to retrieve user profile", extra={"userId": user_id})
            raise ServerError("Failed to retrieve user profile.") from e

        if not user:
            raise NotFoundError("User not found.")
        return user.to_public()

    def simulate_score_update(self, user_id: str) -> PublicUser:
        """Apply a random change in [-25, +25] to the user's credit score.

        The new score is clamped to [300, 850] and one entry is appended
        to the credit history.

        Raises:
            NotFoundError: user no longer exists
            ServerError: persistence failed
        """
        try:
            user = self.repo.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found for score update.")

            # Score is computed from this read; concurrent updates on one user are last-write-wins
            change = self.rng.randint(-MAX_SCORE_CHANGE, MAX_SCORE_CHANGE)
            entry = CreditHistoryEntry(
                timestamp=datetime.now(timezone.utc),
                score=clamp_credit_score(user.credit_score + change),
                note=format_score_change_note(change),
            )

            updated = self.repo.update_credit_score(user_id, entry)
            if not updated:
                raise NotFoundError("User not found for score update.")
        except DomainError:
            raise
        except Exception as e:
            logger.exception("Simulated score update failed", extra={"userId": user_id})
            raise ServerError("Server error during simulated score update.") from e

        logger.info("Credit score simulated", extra={
            "userId": user_id,
            "previousScore": user.credit_score,
            "score": entry.score,
            "change": change,
        })
        return updated.to_public()
