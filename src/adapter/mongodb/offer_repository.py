"""MongoDB implementation of OfferRepository."""

from logging import getLogger

from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import OFFERS_COLLECTION_NAME
from domain.model.errors import PersistenceError
from domain.model.offer import Offer

logger = getLogger(__name__)


class MongoOfferRepository:
    def __init__(self, db: Database):
        self.collection = db[OFFERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for the offers collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('min_credit_score', 1)], 'idx_offers_min_credit_score')
            create_index_safe(
                self.collection,
                [('issuer', 1), ('card_name', 1)],
                'idx_offers_issuer_card_name',
            )
            return True
        except PyMongoError as e:
            logger.error("Failed to create offers indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Offer:
        return Offer(
            id=str(doc['_id']),
            card_name=doc['card_name'],
            issuer=doc['issuer'],
            min_credit_score=doc['min_credit_score'],
            max_credit_score=doc.get('max_credit_score'),
            annual_fee=doc.get('annual_fee', 0),
            apr=doc.get('apr'),
            rewards=doc.get('rewards'),
            card_type=doc.get('card_type'),
            details=doc.get('details'),
            image_url=doc.get('image_url'),
            apply_url=doc.get('apply_url'),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
        )

    def list_all(self) -> list[Offer]:
        try:
            cursor = self.collection.find().sort([('issuer', ASCENDING), ('card_name', ASCENDING)])
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list offers", extra={"error": str(e)})
            raise PersistenceError("Failed to list offers") from e
