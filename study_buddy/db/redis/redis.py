import logging
from typing import Optional

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from study_buddy.config import get_settings
from study_buddy.exceptions import StorageError

logger = logging.getLogger(__name__)

_pool: ConnectionPool | None = None


def get_redis_pool() -> ConnectionPool:
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = ConnectionPool(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            decode_responses=True,
            max_connections=10,
        )
    return _pool


def get_redis_client() -> Redis:
    return Redis(connection_pool=get_redis_pool())


class RedisKeyValueStore:
    """KeyValueStore backed by redis; values are stored without expiry."""

    def __init__(self, redis_client: Redis, key_prefix: str = ""):
        self._redis = redis_client
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(self._key(key))
        except RedisError as e:
            raise StorageError(f"Redis read failed for {key}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self._redis.set(self._key(key), value)
        except RedisError as e:
            raise StorageError(f"Redis write failed for {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(self._key(key))
        except RedisError as e:
            raise StorageError(f"Redis delete failed for {key}: {e}") from e

    async def close(self) -> None:
        await self._redis.aclose()
        logger.info("Redis client closed")
