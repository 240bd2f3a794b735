"""MongoDB index management utilities.

Shared index creation with conflict resolution, used by each Mongo*Repository.
"""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing a conflicting one.

    A conflict is an existing index with the same name but other keys,
    or the same keys under another name.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _replace_conflicting(collection, keys, name, **kwargs)


def _replace_conflicting(collection: Collection, keys: list, name: str, **kwargs) -> bool:
    wanted = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == wanted
        if same_name == same_keys:
            continue

        logger.warning("Dropping conflicting index", extra={"index": idx_name, "collection": collection.name})
        collection.drop_index(idx_name)
        collection.create_index(keys, name=name, **kwargs)
        return True

    logger.error("Failed to resolve index conflict", extra={"index": name, "collection": collection.name})
    return False


def ensure_all_indexes(db: Database) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.offer_repository import MongoOfferRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoOfferRepository(db).ensure_indexes(),
    ]
    return all(results)
