from functools import lru_cache

from study_buddy.config import get_settings
from study_buddy.db.interfaces import InMemoryKeyValueStore, KeyValueStore
from study_buddy.db.redis.redis import RedisKeyValueStore, get_redis_client


@lru_cache(maxsize=1)
def make_store() -> KeyValueStore:
    """
    Create the process-wide key-value store selected by STORAGE_BACKEND.
    """
    settings = get_settings()
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return RedisKeyValueStore(
        redis_client=get_redis_client(),
        key_prefix=settings.redis_key_prefix,
    )
