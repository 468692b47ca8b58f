"""
Utilities Package

This package provides common utilities shared across the client:
- Environment variable management
- Error types
- Logging setup
"""

from .env_utils import load_env_var, get_int_env, get_float_env
from .error_utils import AnalyticsError, StorageError, TransportError, PayloadError, error_fields
from .log_utils import initialize_logging, configure_structlog

__all__ = [
    'load_env_var',
    'get_int_env',
    'get_float_env',
    'AnalyticsError',
    'StorageError',
    'TransportError',
    'PayloadError',
    'error_fields',
    'initialize_logging',
    'configure_structlog'
]
