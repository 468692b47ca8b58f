#!/usr/bin/env python3
"""
Super Properties Storage

Key-value stores holding the client's super properties as a JSON string.
Every backend raises StorageError on failure; the client treats any such
failure as empty state.
"""

import threading
from typing import Dict, Optional, Protocol, runtime_checkable

import redis
import structlog

from ..utils.error_utils import StorageError

logger = structlog.get_logger(__name__)


@runtime_checkable
class Storage(Protocol):
    """Minimal string blob store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class RedisStorage:
    """Storage backed by a Redis client."""

    def __init__(self, redis_client: redis.Redis, ttl_seconds: Optional[int] = None):
        """
        Args:
            redis_client: Connected Redis client
            ttl_seconds: Optional expiry applied on every write
        """
        self.redis_client = redis_client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, redis_url: str, ttl_seconds: Optional[int] = None) -> 'RedisStorage':
        return cls(redis.from_url(redis_url, decode_responses=True), ttl_seconds=ttl_seconds)

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis_client.get(key)
        except redis.exceptions.RedisError as e:
            logger.warning("Redis error reading super properties", key=key, error=str(e))
            raise StorageError(f"Redis error reading '{key}': {e}") from e
        if isinstance(value, bytes):
            return value.decode('utf-8')
        return value

    def set(self, key: str, value: str) -> None:
        try:
            if self.ttl_seconds:
                self.redis_client.setex(key, self.ttl_seconds, value)
            else:
                self.redis_client.set(key, value)
        except redis.exceptions.RedisError as e:
            logger.warning("Redis error writing super properties", key=key, error=str(e))
            raise StorageError(f"Redis error writing '{key}': {e}") from e
