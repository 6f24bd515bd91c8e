"""
Redis-backed key-value storage
Durable local slots for client state, with an in-memory fallback
"""

import redis.asyncio as redis
from typing import Optional, Dict
import logging

logger = logging.getLogger(__name__)

class RedisCache:
    """Redis key-value store with in-memory fallback"""

    def __init__(
        self,
        url: Optional[str] = None,
        max_connections: int = 10,
        decode_responses: bool = True,
    ):
        self.url = url
        self.decode_responses = decode_responses
        self.max_connections = max_connections
        self.redis_client: Optional[redis.Redis] = None
        self._fallback_cache: Dict[str, str] = {}  # Used when Redis is unavailable
        self._use_redis = False

    async def connect(self):
        """Initialize Redis connection"""
        if not self.url:
            logger.info("No Redis URL configured, using in-memory storage")
            return
        try:
            self.redis_client = redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=self.decode_responses,
                max_connections=self.max_connections
            )
            await self.redis_client.ping()
            logger.info("Redis connection established")
            self._use_redis = True
        except Exception as e:
            logger.warning(f"Failed to connect to Redis, using in-memory fallback: {e}")
            self._use_redis = False

    async def disconnect(self):
        """Close Redis connection"""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
            self._use_redis = False
            logger.info("Redis connection closed")

    async def get(self, key: str) -> Optional[str]:
        """Get raw value from storage"""
        if self._use_redis and self.redis_client:
            return await self.redis_client.get(key)
        return self._fallback_cache.get(key)

    async def set(self, key: str, value: str) -> bool:
        """Store raw value"""
        if self._use_redis and self.redis_client:
            return bool(await self.redis_client.set(key, value))
        self._fallback_cache[key] = value
        return True

