"""Configuration management with JSON file persistence."""

import json
import os
from dataclasses import asdict, fields, replace
from typing import Optional, Dict, Any, Callable, List

from .models.config import SystemConfig
from .config.defaults import DEFAULT_CONFIG, DEFAULT_PATHS, STORE_BACKENDS, LOG_LEVELS
from .services.error_handler import ConfigurationError
from .utils import ensure_directory_exists
from .logging_config import get_logger

logger = get_logger("config_manager")


class ConfigManager:
    """Manages system configuration with file persistence and change callbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SystemConfig] = None
        self._config_change_callbacks: List[Callable[[SystemConfig], None]] = []

        self.load_config()

    def load_config(self) -> SystemConfig:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                known = {f.name for f in fields(SystemConfig)}
                self._config = SystemConfig(**{k: v for k, v in config_dict.items() if k in known})
            except (json.JSONDecodeError, TypeError, AttributeError) as e:
                logger.warning(f"Error loading config: {e}. Using defaults.")
                self._config = SystemConfig()
        else:
            self._config = SystemConfig()
            self.save_config()

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        ensure_directory_exists(os.path.dirname(self.config_path))
        with open(self.config_path, 'w') as f:
            json.dump(asdict(self._config), f, indent=2)

    def get_config(self) -> SystemConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values; unknown keys are ignored.

        Raises:
            ConfigurationError: if the result would not validate. The previous
                configuration is kept and callbacks are not notified.
        """
        if self._config is None:
            self.load_config()

        previous = replace(self._config)
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        if not self.validate_config():
            self._config = previous
            raise ConfigurationError(f"Invalid configuration update: {kwargs}")

        self.save_config()
        self._notify_callbacks()

    def validate_config(self) -> bool:
        """Validate current configuration."""
        if self._config is None:
            return False

        threshold = self._config.cat_confidence_threshold
        if not isinstance(threshold, (int, float)) or not 0.0 <= threshold <= 1.0:
            return False

        if self._config.store_backend not in STORE_BACKENDS:
            return False

        if self._config.store_backend == "sqlite" and not self._config.database_path:
            return False

        if not isinstance(self._config.log_level, str) or \
                self._config.log_level.upper() not in LOG_LEVELS:
            return False

        if self._config.log_dir is not None and not isinstance(self._config.log_dir, str):
            return False

        seed = self._config.classifier_seed
        if seed is not None and not isinstance(seed, int):
            return False

        return True

    def register_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Register a callback to be called when config changes."""
        if callback not in self._config_change_callbacks:
            self._config_change_callbacks.append(callback)

    def unregister_change_callback(self, callback: Callable[[SystemConfig], None]) -> None:
        """Unregister a config change callback."""
        if callback in self._config_change_callbacks:
            self._config_change_callbacks.remove(callback)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = SystemConfig(**DEFAULT_CONFIG)
        self.save_config()
        self._notify_callbacks()
        logger.info("Configuration reset to defaults")

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration as dictionary."""
        return asdict(self.get_config())

    def _notify_callbacks(self) -> None:
        for callback in self._config_change_callbacks:
            callback(self._config)
