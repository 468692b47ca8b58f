#!/usr/bin/env python3
"""
Logging Utilities

This module provides standardized structlog setup. The library itself only
calls structlog.get_logger(); hosts opt in to output via initialize_logging().
"""

import os
import sys
import logging
from typing import Optional
import structlog

# --- structlog configuration ---

def configure_structlog(json_output: bool = True) -> None:
    """
    Configure structlog processors on top of the standard logging handlers.

    Args:
        json_output: Render events as JSON lines (True) or as console text (False)
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level, # Adds log level (e.g., 'info')
            structlog.stdlib.add_logger_name, # Adds logger name
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.dict_tracebacks,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

# --- Standard logging setup (for handlers) ---

def setup_standard_logging(log_file: Optional[str] = None, level: int = logging.INFO) -> None:
    """
    Sets up standard logging handlers (Console, File).
    structlog will use these handlers for output.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers (important for reconfiguration)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        root_logger.addHandler(logging.FileHandler(log_file))

def initialize_logging(log_level_name: str = 'INFO', log_file: Optional[str] = None, json_output: bool = True) -> None:
    """
    Call this once at application startup to configure logging handlers.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    setup_standard_logging(log_file=log_file, level=log_level)
    configure_structlog(json_output=json_output)
    structlog.get_logger(__name__).info("Logging initialized", log_level=log_level_name, log_file=log_file or 'console')
