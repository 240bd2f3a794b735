from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Offer:
    """Credit card offer from the catalog.

    The eligibility window is [min_credit_score, max_credit_score];
    a missing max_credit_score means no upper bound.
    """
    id: str
    card_name: str
    issuer: str
    min_credit_score: int
    max_credit_score: int | None = None
    annual_fee: float = 0
    apr: float | None = None
    rewards: str | None = None
    card_type: str | None = None
    details: str | None = None
    image_url: str | None = None
    apply_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def accepts(self, credit_score: int) -> bool:
        """Return True if credit_score falls inside the eligibility window."""
        if self.min_credit_score > credit_score:
            return False
        return self.max_credit_score is None or self.max_credit_score >= credit_score
