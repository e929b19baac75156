"""Unit tests for the console simulator."""

import unittest
import io
import json
import tempfile
import shutil
from contextlib import redirect_stdout
import sys
import os

from PIL import Image

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.config_manager import ConfigManager
from catpoint_security.models.sensor import Sensor, SensorType
from catpoint_security.models.status import AlarmStatus, ArmingStatus
from catpoint_security.services.error_handler import ConfigurationError, ErrorHandler, ErrorSeverity
from catpoint_security.services.status_store import SqliteStatusStore
from catpoint_security.simulator import (
    ConsoleStatusListener, build_service, main, run_command, run_commands
)


class TestSimulator(unittest.TestCase):
    """Test cases for simulator commands."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, "config.json")
        self.config_manager = ConfigManager(self.config_path)
        self.config_manager.update_config(classifier_seed=5)
        self.error_handler = ErrorHandler()
        self.service = build_service(self.config_manager, self.error_handler)
        self.out = io.StringIO()
        self.service.add_status_listener(ConsoleStatusListener(self.out))

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def create_image(self):
        image_path = os.path.join(self.test_dir, "camera.png")
        Image.new("RGB", (16, 16), color=(200, 120, 40)).save(image_path)
        return image_path

    def test_sensor_commands_drive_alarm(self):
        failures = run_commands(self.service, [
            "add front_door door",
            "arm away",
            "activate front_door door",
            "deactivate front_door door",
        ], self.out)

        self.assertEqual(failures, 0)
        self.assertEqual(self.service.get_arming_status(), ArmingStatus.ARMED_AWAY)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.NO_ALARM)
        output = self.out.getvalue()
        self.assertIn("System Status: I'm in Danger...", output)
        self.assertIn("System Status: Cool and Good", output)

    def test_status_command(self):
        run_commands(self.service, ["add porch door", "add hall motion", "status"], self.out)

        output = self.out.getvalue()
        self.assertIn("Alarm: Cool and Good", output)
        self.assertIn("Arming: Disarmed", output)
        self.assertLess(output.index("hall (Motion): Inactive"),
                        output.index("porch (Door): Inactive"))
        self.assertIn("Health: security_service healthy (0 errors)", output)

    def test_image_command_with_cat_sets_alarm(self):
        self.config_manager.update_config(cat_confidence_threshold=0.0)
        image_path = self.create_image()

        failures = run_commands(self.service, ["arm home", f"image {image_path}"], self.out)

        self.assertEqual(failures, 0)
        self.assertEqual(self.service.get_alarm_status(), AlarmStatus.ALARM)
        self.assertIn("DANGER - CAT DETECTED", self.out.getvalue())

    def test_blank_and_comment_lines_ignored(self):
        self.assertEqual(run_commands(self.service, ["", "   ", "# note"], self.out), 0)

    def test_bad_commands_counted(self):
        failures = run_commands(self.service, [
            "launch rockets",
            "add only_name",
            "add vent chimney",
            "arm sideways",
            "activate ghost motion",
            "image /nonexistent/frame.png",
        ], self.out)

        self.assertEqual(failures, 6)
        self.assertEqual(self.out.getvalue().count("Error:"), 6)

    def test_status_command_reports_degraded_component(self):
        self.error_handler.handle_error("security_service", RuntimeError("store offline"),
                                        ErrorSeverity.HIGH)

        run_command(self.service, "status", self.out)

        self.assertIn("Health: security_service degraded (1 errors)", self.out.getvalue())

    def test_remove_command(self):
        run_command(self.service, "add attic window", self.out)
        run_command(self.service, "remove attic window", self.out)

        self.assertNotIn(Sensor("attic", SensorType.WINDOW), self.service.get_sensors())

    def test_build_service_rejects_invalid_config(self):
        self.config_manager.get_config().store_backend = "cloud"

        with self.assertRaises(ConfigurationError):
            build_service(self.config_manager)

    def test_build_service_sqlite_backend(self):
        database_path = os.path.join(self.test_dir, "db", "security.db")
        self.config_manager.update_config(store_backend="sqlite", database_path=database_path)

        service = build_service(self.config_manager)

        self.assertIsInstance(service.status_store, SqliteStatusStore)


class TestSimulatorMain(unittest.TestCase):
    """Test cases for the simulator entry point."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, "config.json")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            exit_code = main(argv)
        return exit_code, out.getvalue()

    def test_main_runs_commands(self):
        exit_code, output = self.run_main([
            "--config", self.config_path, "--log-level", "WARNING",
            "-c", "add front_door door", "-c", "arm home", "-c", "status"
        ])

        self.assertEqual(exit_code, 0)
        self.assertIn("Arming: Armed - At Home", output)

    def test_main_runs_script_file(self):
        script_path = os.path.join(self.test_dir, "script.txt")
        with open(script_path, 'w') as f:
            f.write("add window1 window\narm away\nactivate window1 window\nstatus\n")

        exit_code, output = self.run_main(
            ["--config", self.config_path, "--log-level", "WARNING", script_path])

        self.assertEqual(exit_code, 0)
        self.assertIn("Alarm: I'm in Danger...", output)

    def test_main_reports_failures(self):
        exit_code, _ = self.run_main(
            ["--config", self.config_path, "--log-level", "WARNING", "-c", "bogus"])
        self.assertEqual(exit_code, 1)

    def test_main_invalid_config(self):
        with open(self.config_path, 'w') as f:
            json.dump({"cat_confidence_threshold": 3.0}, f)

        exit_code, _ = self.run_main(["--config", self.config_path, "--log-level", "WARNING"])

        self.assertEqual(exit_code, 2)

    def test_main_non_string_log_level_is_invalid_config(self):
        with open(self.config_path, 'w') as f:
            json.dump({"log_level": 10}, f)

        exit_code, output = self.run_main(["--config", self.config_path, "-c", "status"])

        self.assertEqual(exit_code, 2)
        self.assertNotIn("Alarm:", output)


if __name__ == '__main__':
    unittest.main()
