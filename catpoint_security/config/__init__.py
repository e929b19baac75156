"""Configuration components for the security system."""

from .defaults import (
    DEFAULT_CONFIG,
    DEFAULT_PATHS,
    STORE_BACKENDS,
    LOG_LEVELS
)

__all__ = [
    'DEFAULT_CONFIG',
    'DEFAULT_PATHS',
    'STORE_BACKENDS',
    'LOG_LEVELS'
]
