"""
Centralized configuration for the Mixpanel analytics client.

Loads settings from environment variables with sensible defaults.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Union
from dotenv import load_dotenv

from .utils.env_utils import load_env_var, get_int_env, get_float_env

# Load .env file if present (especially useful for local development)
load_dotenv()

DEFAULT_MIXPANEL_API_URL = "https://api.mixpanel.com"
DEFAULT_STORAGE_KEY = "mixpanel:super:props"
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds
DEFAULT_MAX_WORKERS = 4
DEFAULT_USER_AGENT = "mixpanel-analytics-python/0.1.0"

# camelCase option names accepted alongside the snake_case ones
OPTION_ALIASES = {
    'clientId': 'client_id',
    'storageKey': 'storage_key',
    'apiUrl': 'api_url',
}

class AnalyticsConfig:
    """Environment-level configuration class."""

    # --- Mixpanel ---
    MIXPANEL_TOKEN = load_env_var('MIXPANEL_TOKEN')
    MIXPANEL_API_URL = load_env_var('MIXPANEL_API_URL', DEFAULT_MIXPANEL_API_URL)
    MIXPANEL_STORAGE_KEY = load_env_var('MIXPANEL_STORAGE_KEY', DEFAULT_STORAGE_KEY)
    MIXPANEL_CLIENT_ID = load_env_var('MIXPANEL_CLIENT_ID')

    # --- Delivery ---
    MIXPANEL_REQUEST_TIMEOUT = get_float_env('MIXPANEL_REQUEST_TIMEOUT', DEFAULT_REQUEST_TIMEOUT)
    MIXPANEL_MAX_WORKERS = get_int_env('MIXPANEL_MAX_WORKERS', DEFAULT_MAX_WORKERS)
    MIXPANEL_USER_AGENT = load_env_var('MIXPANEL_USER_AGENT', DEFAULT_USER_AGENT)

    # --- Redis (super properties store) ---
    REDIS_URL = load_env_var('REDIS_URL')
    MIXPANEL_STORAGE_TTL = get_int_env('MIXPANEL_STORAGE_TTL')  # seconds, unset keeps keys forever

    # --- Logging ---
    LOG_LEVEL = load_env_var('LOG_LEVEL', 'INFO').upper()
    LOG_FILE = load_env_var('LOG_FILE')


@dataclass
class ClientOptions:
    """Per-client options recognised by MixpanelAnalytics."""

    client_id: Optional[str] = None
    storage_key: str = DEFAULT_STORAGE_KEY
    api_url: str = DEFAULT_MIXPANEL_API_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        if self.storage_key is None:
            self.storage_key = DEFAULT_STORAGE_KEY
        if self.api_url is None:
            self.api_url = DEFAULT_MIXPANEL_API_URL
        self.api_url = self.api_url.rstrip('/')
        if self.max_workers is None or self.max_workers < 1:
            raise ValueError("max_workers must be a positive integer")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'ClientOptions':
        """Build options from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        options = {}
        for key, value in values.items():
            key = OPTION_ALIASES.get(key, key)
            if key in known and value is not None:
                options[key] = value
        return cls(**options)

    @classmethod
    def from_config(cls, config_object=AnalyticsConfig) -> 'ClientOptions':
        """Build options from an AnalyticsConfig-like object."""
        return cls.from_mapping({
            'client_id': getattr(config_object, 'MIXPANEL_CLIENT_ID', None),
            'storage_key': getattr(config_object, 'MIXPANEL_STORAGE_KEY', None),
            'api_url': getattr(config_object, 'MIXPANEL_API_URL', None),
            'request_timeout': getattr(config_object, 'MIXPANEL_REQUEST_TIMEOUT', None),
            'max_workers': getattr(config_object, 'MIXPANEL_MAX_WORKERS', None),
            'user_agent': getattr(config_object, 'MIXPANEL_USER_AGENT', None),
        })

    @classmethod
    def coerce(cls, config: Union['ClientOptions', Mapping[str, Any], None]) -> 'ClientOptions':
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        return cls.from_mapping(config)
