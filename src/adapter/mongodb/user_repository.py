"""MongoDB implementation of UserRepository."""

import uuid
from dataclasses import asdict
from datetime import date, datetime, time, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, PersistenceError
from domain.model.user import (
    DEFAULT_CREDIT_SCORE,
    Address,
    CreditHistoryEntry,
    User,
)

logger = getLogger(__name__)


def _date_to_bson(value: date | None) -> datetime | None:
    # BSON has no date-only type
    if value is None:
        return None
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _date_from_bson(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        address = doc.get('address')
        return User(
            id=doc['_id'],
            email=doc['email'],
            first_name=doc['first_name'],
            last_name=doc['last_name'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            password_hash=doc.get('password_hash'),
            phone_number=doc.get('phone_number'),
            date_of_birth=_date_from_bson(doc.get('date_of_birth')),
            address=Address(**address) if address else None,
            credit_score=doc.get('credit_score', DEFAULT_CREDIT_SCORE),
            credit_history=[
                CreditHistoryEntry(
                    timestamp=entry['timestamp'],
                    score=entry['score'],
                    note=entry.get('note'),
                )
                for entry in doc.get('credit_history', [])
            ],
        )

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
        """Insert a new user document and return the User."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'email': email,
            'password_hash': password_hash,
            'first_name': first_name,
            'last_name': last_name,
            'phone_number': phone_number,
            'date_of_birth': _date_to_bson(date_of_birth),
            'address': asdict(address) if address else None,
            'credit_score': DEFAULT_CREDIT_SCORE,
            'credit_history': [],
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError("User already exists with this email.") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise PersistenceError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise PersistenceError("Failed to get user by email") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to get user by ID") from e
        return self._to_domain(doc) if doc else None

    def update_credit_score(self, user_id: str, entry: CreditHistoryEntry) -> User | None:
        """Set the score and push the history entry in a single atomic update."""
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {
                    '$set': {
                        'credit_score': entry.score,
                        'updated_at': datetime.now(timezone.utc),
                    },
                    '$push': {'credit_history': asdict(entry)},
                },
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update credit score", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to update credit score") from e

        if not doc:
            return None
        logger.debug("Credit score updated", extra={"userId": user_id, "score": entry.score})
        return self._to_domain(doc)
