"""Offer catalog queries: full listing and score-based recommendations."""

import logging

from domain.model.errors import ServerError
from domain.model.offer import Offer
from port.offer_repository import OfferRepository
from services.recommendation import recommend_offers, sort_catalog, validate_credit_score

logger = logging.getLogger(__name__)


class OfferService:
    def __init__(self, repo: OfferRepository):
        self.repo = repo

    def list_offers(self) -> list[Offer]:
        """All offers sorted by issuer, then card name."""
        try:
            offers = self.repo.list_all()
        except Exception as e:
            logger.exception("Error fetching all offers")
            raise ServerError("Failed to fetch credit card offers.") from e
        return sort_catalog(offers)

    def recommended_offers(self, credit_score: int) -> list[Offer]:
        """Offers the given score qualifies for.

        Raises:
            ValidationError: score outside [300, 850]
            ServerError: catalog could not be read
        """
        validate_credit_score(credit_score)
        try:
            offers = self.repo.list_all()
        except Exception as e:
            logger.exception("Error fetching recommended offers", extra={"creditScore": credit_score})
            raise ServerError("Failed to fetch recommended credit card offers.") from e

        recommended = recommend_offers(offers, credit_score)
        logger.debug("Offers recommended", extra={
            "creditScore": credit_score,
            "eligible": len(recommended),
            "catalog": len(offers),
        })
        return recommended
