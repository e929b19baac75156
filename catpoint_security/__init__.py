"""
Catpoint Security

A home security system simulator: door, window and motion sensors feed an
alarm status, and a camera image classifier watches for cats while the
system is armed at home.
"""

__version__ = "1.0.0"
__author__ = "Catpoint Security"

# Import core components
from .config_manager import ConfigManager
from .models import (
    Sensor,
    SensorType,
    AlarmStatus,
    ArmingStatus,
    SystemConfig
)
from .services import (
    StatusStoreInterface,
    ImageClassifierInterface,
    StatusListener,
    SecurityService,
    InMemoryStatusStore,
    SqliteStatusStore,
    FakeImageClassifier,
    SecurityError,
    SensorNotFoundError,
    ConfigurationError
)
from . import utils

__all__ = [
    # Core management
    'ConfigManager',
    'SecurityService',

    # Data models
    'Sensor',
    'SensorType',
    'AlarmStatus',
    'ArmingStatus',
    'SystemConfig',

    # Service interfaces
    'StatusStoreInterface',
    'ImageClassifierInterface',
    'StatusListener',

    # Implementations
    'InMemoryStatusStore',
    'SqliteStatusStore',
    'FakeImageClassifier',

    # Errors
    'SecurityError',
    'SensorNotFoundError',
    'ConfigurationError',

    # Utilities
    'utils'
]
