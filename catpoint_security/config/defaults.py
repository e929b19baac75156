"""Default configuration values and constants."""

from typing import Dict, Any

# Default system configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Image analysis
    "cat_confidence_threshold": 0.5,
    "classifier_seed": None,

    # Status store
    "store_backend": "memory",
    "database_path": "data/security.db",

    # Logging
    "log_level": "INFO",
    "log_dir": None
}

STORE_BACKENDS = ("memory", "sqlite")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# File paths
DEFAULT_PATHS = {
    "config_file": "config.json"
}
