"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Error hierarchy rendered by the API
- locks.py          : Reader/writer lock for shared in-memory state
"""
from civic_chat.core.config import get_settings, Settings
from civic_chat.core.logging_config import setup_logging, get_logger

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
]
