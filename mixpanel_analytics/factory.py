"""Client factory wiring configuration, logging and the Redis store."""

from typing import Optional

import redis
import structlog

from .analytics.client import MixpanelAnalytics
from .collaborators.device import DeviceInfo
from .collaborators.storage import MemoryStorage, RedisStorage, Storage
from .config import AnalyticsConfig, ClientOptions
from .utils.log_utils import initialize_logging

logger = structlog.get_logger(__name__)


def create_storage(redis_url: Optional[str], ttl_seconds: Optional[int] = None) -> Storage:
    """Return Redis-backed storage when reachable, in-memory storage otherwise."""
    if not redis_url:
        logger.info("No REDIS_URL configured, super properties kept in memory.")
        return MemoryStorage()
    try:
        storage = RedisStorage.from_url(redis_url, ttl_seconds=ttl_seconds)
        storage.redis_client.ping() # Test connection
        logger.info("Redis client connected successfully.", redis_url=redis_url, ttl_seconds=ttl_seconds)
        return storage
    except (redis.exceptions.RedisError, ValueError) as e:
        logger.error("Failed to connect to Redis. Super properties kept in memory.", redis_url=redis_url, error=str(e))
        return MemoryStorage()


def create_client(
    token: Optional[str] = None,
    config_object=AnalyticsConfig,
    *,
    device: Optional[DeviceInfo] = None,
    storage: Optional[Storage] = None,
    configure_logging: bool = False,
    init: bool = True
) -> MixpanelAnalytics:
    """
    Build a client from environment configuration.

    Args:
        token: Project token; falls back to config_object.MIXPANEL_TOKEN.
        config_object: AnalyticsConfig-like class or object.
        device: Device metadata provider. Defaults to the host machine.
        storage: Super properties store. Defaults to Redis when REDIS_URL is set.
        configure_logging: Install structlog/stdlib handlers using LOG_LEVEL.
        init: Run init() before returning.

    Raises:
        ValueError: If no token is given or configured.
    """
    if configure_logging:
        initialize_logging(
            log_level_name=getattr(config_object, 'LOG_LEVEL', 'INFO'),
            log_file=getattr(config_object, 'LOG_FILE', None)
        )

    token = token or getattr(config_object, 'MIXPANEL_TOKEN', None)
    if not token:
        raise ValueError("MIXPANEL_TOKEN is not configured.")

    if storage is None:
        storage = create_storage(
            getattr(config_object, 'REDIS_URL', None),
            ttl_seconds=getattr(config_object, 'MIXPANEL_STORAGE_TTL', None)
        )

    client = MixpanelAnalytics(
        token,
        ClientOptions.from_config(config_object),
        storage=storage,
        device=device
    )
    if init:
        client.init()
    return client
