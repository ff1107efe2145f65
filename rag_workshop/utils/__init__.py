"""Utilities for RAG Workshop."""

from .config_manager import ConfigManager

__all__ = [
    'ConfigManager',
]
