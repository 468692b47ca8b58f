#!/usr/bin/env python3
"""
Environment Variable Utilities

This module provides functions for reading typed configuration values
from environment variables.
"""

import os
from typing import Any, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

def load_env_var(var_name: str, default: Any = None, required: bool = False) -> Any:
    """
    Load an environment variable with default value and validation.

    Args:
        var_name: Name of the environment variable
        default: Default value to return if not found
        required: Whether the variable is required (raises ValueError if missing)

    Returns:
        The value of the environment variable or default

    Raises:
        ValueError: If required=True and the variable is not set
    """
    value = os.getenv(var_name)

    if value is None:
        if required:
            raise ValueError(f"Required environment variable {var_name} not set")
        return default

    return value

def get_int_env(var_name: str, default: Optional[int] = None) -> Optional[int]:
    """
    Get an integer from an environment variable.

    Falls back to the default when the variable is unset or not a valid integer.
    """
    value = os.getenv(var_name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default

def get_float_env(var_name: str, default: Optional[float] = None) -> Optional[float]:
    """Get a float from an environment variable, falling back to the default."""
    value = os.getenv(var_name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default
