"""Unit tests for configuration manager."""

import unittest
import os
import json
import tempfile
import shutil
from unittest.mock import Mock
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.config_manager import ConfigManager
from catpoint_security.config.defaults import DEFAULT_CONFIG
from catpoint_security.models.config import SystemConfig
from catpoint_security.services.error_handler import ConfigurationError


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, "test_config.json")
        self.config_manager = ConfigManager(self.config_path)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_initialization(self):
        """Test configuration manager initialization."""
        self.assertEqual(self.config_manager.config_path, self.config_path)
        self.assertIsInstance(self.config_manager.get_config(), SystemConfig)
        self.assertTrue(os.path.exists(self.config_path))

    def test_default_values_match_defaults_table(self):
        config = self.config_manager.get_config()
        for key, value in DEFAULT_CONFIG.items():
            self.assertEqual(getattr(config, key), value)

    def test_load_save_config(self):
        """Test loading and saving configuration."""
        self.config_manager.update_config(cat_confidence_threshold=0.8, store_backend="sqlite")

        new_manager = ConfigManager(self.config_path)
        self.assertEqual(new_manager.get_config().cat_confidence_threshold, 0.8)
        self.assertEqual(new_manager.get_config().store_backend, "sqlite")

    def test_update_config_ignores_unknown_keys(self):
        self.config_manager.update_config(invalid_key="value")

        self.assertFalse(hasattr(self.config_manager.get_config(), "invalid_key"))
        with open(self.config_path, 'r') as f:
            self.assertNotIn("invalid_key", json.load(f))

    def test_corrupt_file_falls_back_to_defaults(self):
        with open(self.config_path, 'w') as f:
            f.write("{not json")

        manager = ConfigManager(self.config_path)

        self.assertEqual(manager.get_config(), SystemConfig())

    def test_unknown_keys_in_file_are_skipped(self):
        with open(self.config_path, 'w') as f:
            json.dump({"cat_confidence_threshold": 0.3, "legacy_option": True}, f)

        manager = ConfigManager(self.config_path)

        self.assertEqual(manager.get_config().cat_confidence_threshold, 0.3)

    def write_config_file(self, values):
        with open(self.config_path, 'w') as f:
            json.dump(values, f)

    def test_validate_config(self):
        """Test configuration validation."""
        self.assertTrue(self.config_manager.validate_config())

        invalid_configs = [
            {"cat_confidence_threshold": 1.5},
            {"cat_confidence_threshold": -0.1},
            {"cat_confidence_threshold": "high"},
            {"store_backend": "preferences"},
            {"store_backend": "sqlite", "database_path": ""},
            {"log_level": "LOUD"},
            {"log_level": 10},
            {"log_dir": 5},
            {"classifier_seed": "abc"},
        ]
        for values in invalid_configs:
            with self.subTest(values=values):
                self.write_config_file(values)
                self.assertFalse(ConfigManager(self.config_path).validate_config())

    def test_update_config_rejects_invalid_values(self):
        callback = Mock()
        self.config_manager.register_change_callback(callback)
        self.config_manager.update_config(cat_confidence_threshold=0.7)
        callback.reset_mock()

        with self.assertRaises(ConfigurationError):
            self.config_manager.update_config(cat_confidence_threshold="high", log_level="DEBUG")

        self.assertEqual(self.config_manager.get_config().cat_confidence_threshold, 0.7)
        self.assertEqual(self.config_manager.get_config().log_level, "INFO")
        self.assertTrue(self.config_manager.validate_config())
        callback.assert_not_called()
        with open(self.config_path, 'r') as f:
            self.assertEqual(json.load(f)["cat_confidence_threshold"], 0.7)

    def test_change_callbacks(self):
        callback = Mock()
        self.config_manager.register_change_callback(callback)

        self.config_manager.update_config(cat_confidence_threshold=0.9)

        callback.assert_called_once_with(self.config_manager.get_config())

        self.config_manager.unregister_change_callback(callback)
        self.config_manager.update_config(cat_confidence_threshold=0.4)
        callback.assert_called_once()

    def test_reset_to_defaults(self):
        self.config_manager.update_config(cat_confidence_threshold=0.9, log_level="DEBUG")

        self.config_manager.reset_to_defaults()

        self.assertEqual(self.config_manager.export_config(), DEFAULT_CONFIG)


if __name__ == '__main__':
    unittest.main()
