"""In-memory implementation of OfferRepository for testing."""

from domain.model.offer import Offer


class FakeOfferRepository:
    def __init__(self, offers: list[Offer] | None = None):
        self.offers: list[Offer] = list(offers or [])

    def add(self, offer: Offer) -> None:
        self.offers.append(offer)

    def list_all(self) -> list[Offer]:
        # insertion order, unsorted
        return list(self.offers)
