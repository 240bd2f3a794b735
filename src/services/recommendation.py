"""Score-based offer matching.

Pure functions over an offer collection: no I/O, same input, same output.
"""

from collections.abc import Iterable

from domain.model.errors import ValidationError
from domain.model.offer import Offer
from domain.model.user import MAX_CREDIT_SCORE, MIN_CREDIT_SCORE


def validate_credit_score(credit_score) -> int:
    """Return credit_score if it is an int within [300, 850].

    Raises:
        ValidationError: score is not an int or is out of range
    """
    if (
        not isinstance(credit_score, int)
        or isinstance(credit_score, bool)
        or not MIN_CREDIT_SCORE <= credit_score <= MAX_CREDIT_SCORE
    ):
        raise ValidationError("Invalid credit score provided for recommendations.")
    return credit_score


def is_eligible(offer: Offer, credit_score: int) -> bool:
    return offer.accepts(credit_score)


def recommend_offers(offers: Iterable[Offer], credit_score: int) -> list[Offer]:
    """Offers whose eligibility window contains credit_score.

    Highest min_credit_score first; ties by card_name ascending.
    """
    credit_score = validate_credit_score(credit_score)
    eligible = [offer for offer in offers if is_eligible(offer, credit_score)]
    # two stable passes: secondary key first
    eligible.sort(key=lambda offer: offer.card_name)
    eligible.sort(key=lambda offer: offer.min_credit_score, reverse=True)
    return eligible


def sort_catalog(offers: Iterable[Offer]) -> list[Offer]:
    """Full catalog ordered by issuer, then card_name."""
    return sorted(offers, key=lambda offer: (offer.issuer, offer.card_name))
