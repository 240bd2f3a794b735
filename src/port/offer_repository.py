"""Port definition for OfferRepository."""

from typing import Protocol

from domain.model.offer import Offer


class OfferRepository(Protocol):
    def list_all(self) -> list[Offer]:
        """Return every offer in the catalog. Raises PersistenceError on store failure."""
        ...
