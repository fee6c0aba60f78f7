"""
Redis cache utility for the module catalog
"""
import redis
import json
import logging
from typing import Optional, Any
from app.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """
    Redis-based caching for read-only catalog responses

    Connects lazily on first use. Any Redis failure disables caching for the
    rest of the process and callers fall through to the database.
    """

    KEY_PREFIX = "catalog:"

    def __init__(self, url: str = None, enabled: bool = None):
        self.url = url or settings.REDIS_URL
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled
        self.redis_client = None
        self._connected = False

    def _client(self):
        if not self.enabled:
            return None
        if self._connected:
            return self.redis_client

        self._connected = True
        try:
            self.redis_client = redis.from_url(
                self.url,
                decode_responses=True,
                socket_connect_timeout=5
            )
            # Test connection
            self.redis_client.ping()
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {str(e)}. Caching disabled.")
            self.redis_client = None
        return self.redis_client

    def modules_key(self) -> str:
        return f"{self.KEY_PREFIX}modules"

    def module_key(self, module_id: str) -> str:
        return f"{self.KEY_PREFIX}module:{module_id}"

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        client = self._client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"Cache hit: {key}")
                return json.loads(value)
            logger.debug(f"Cache miss: {key}")
            return None
        except redis.RedisError as e:
            logger.error(f"Cache get error: {str(e)}")
            return None

    def set(self, key: str, value: Any, ttl: int = None) -> bool:
        """
        Set value in cache

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time to live in seconds (default from settings)

        Returns:
            Success status
        """
        client = self._client()
        if not client:
            return False

        try:
            ttl = ttl or settings.MODULE_CACHE_TTL
            client.setex(key, ttl, json.dumps(value))
            logger.debug(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache set error: {str(e)}")
            return False

    def clear_catalog(self) -> bool:
        """Drop every cached catalog entry, e.g. after reseeding"""
        client = self._client()
        if not client:
            return False

        try:
            keys = list(client.scan_iter(match=f"{self.KEY_PREFIX}*"))
            if keys:
                client.delete(*keys)
                logger.info(f"Cleared {len(keys)} catalog cache entries")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache clear error: {str(e)}")
            return False


# Global instance
cache_service = CacheService()
