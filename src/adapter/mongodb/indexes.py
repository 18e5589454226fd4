"""MongoDB index management, used by each MongoXxxRepository.ensure_indexes()."""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)

# Server error codes raised when an index with the same name or keys differs.
INDEX_OPTIONS_CONFLICT = 85
INDEX_KEY_SPECS_CONFLICT = 86


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an older index that clashes by name or key spec."""
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        if e.code not in (INDEX_OPTIONS_CONFLICT, INDEX_KEY_SPECS_CONFLICT):
            raise

    stale = _find_conflicting(collection, dict(keys), name)
    if stale is None:
        logger.error("Index conflict could not be resolved", extra={"index": name})
        return False

    logger.warning("Replacing conflicting index", extra={"index": stale, "replacement": name})
    collection.drop_index(stale)
    collection.create_index(keys, name=name, **kwargs)
    return True


def _find_conflicting(collection, keys: dict, name: str) -> str | None:
    for idx_name, info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        if idx_name == name or dict(info.get('key', [])) == keys:
            return idx_name
    return None


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.notification_repository import MongoNotificationRepository
    from adapter.mongodb.product_repository import MongoProductRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoProductRepository(db).ensure_indexes(),
        MongoNotificationRepository(db).ensure_indexes(),
    ]
    return all(results)
