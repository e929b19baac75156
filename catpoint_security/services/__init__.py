"""Services for the security system."""

from .interfaces import (
    StatusStoreInterface,
    ImageClassifierInterface,
    StatusListener
)
from .security_service import SecurityService
from .status_store import InMemoryStatusStore, SqliteStatusStore, create_status_store
from .image_classifier import FakeImageClassifier, load_image
from .error_handler import (
    SecurityError,
    SensorNotFoundError,
    ConfigurationError,
    ErrorHandler,
    ErrorSeverity
)

__all__ = [
    'StatusStoreInterface',
    'ImageClassifierInterface',
    'StatusListener',
    'SecurityService',
    'InMemoryStatusStore',
    'SqliteStatusStore',
    'create_status_store',
    'FakeImageClassifier',
    'load_image',
    'SecurityError',
    'SensorNotFoundError',
    'ConfigurationError',
    'ErrorHandler',
    'ErrorSeverity'
]
