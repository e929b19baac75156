#!/usr/bin/env python3
"""Console driver for the security system.

Runs a sequence of commands against a SecurityService, one command per line
(from a script file, ``-c`` options or stdin):

    add NAME TYPE          register a sensor (TYPE: door, window, motion)
    remove NAME TYPE       unregister a sensor
    activate NAME TYPE     mark a sensor active
    deactivate NAME TYPE   mark a sensor inactive
    arm home|away|off      change arming status
    image PATH             run an image file through the classifier
    status                 print alarm status, arming status, sensors and
                           component health
"""

import argparse
import shlex
import sys
from typing import Iterable, List, Optional, TextIO

from .config_manager import ConfigManager
from .logging_config import get_logger, setup_logging
from .models.sensor import Sensor, SensorType
from .models.status import AlarmStatus, ArmingStatus
from .services.error_handler import ConfigurationError, ErrorHandler, SecurityError
from .services.image_classifier import FakeImageClassifier, load_image
from .services.interfaces import StatusListener
from .services.security_service import SecurityService
from .services.status_store import create_status_store
from .utils import format_sensor

logger = get_logger("simulator")

ARM_COMMANDS = {
    "home": ArmingStatus.ARMED_HOME,
    "away": ArmingStatus.ARMED_AWAY,
    "off": ArmingStatus.DISARMED,
}


class ConsoleStatusListener(StatusListener):
    """Prints status changes to a text stream."""

    def __init__(self, out: TextIO):
        self.out = out

    def notify(self, alarm_status: AlarmStatus) -> None:
        print(f"System Status: {alarm_status.description}", file=self.out)

    def cat_detected(self, detected: bool) -> None:
        message = "DANGER - CAT DETECTED" if detected else "Camera shows no cats"
        print(message, file=self.out)

    def sensor_status_changed(self) -> None:
        pass


def build_service(config_manager: ConfigManager,
                  error_handler: Optional[ErrorHandler] = None) -> SecurityService:
    """Wire a SecurityService from configuration."""
    if not config_manager.validate_config():
        raise ConfigurationError(f"Invalid configuration in {config_manager.config_path}")

    config = config_manager.get_config()
    store = create_status_store(config.store_backend, config.database_path)
    classifier = FakeImageClassifier(seed=config.classifier_seed)

    service = SecurityService(store, classifier, config, error_handler)
    config_manager.register_change_callback(service.on_config_changed)
    return service


def _parse_sensor(args: List[str]) -> Sensor:
    if len(args) != 2:
        raise ValueError("expected NAME TYPE")
    name, type_name = args
    try:
        sensor_type = SensorType[type_name.upper()]
    except KeyError:
        raise ValueError(f"unknown sensor type: {type_name}") from None
    return Sensor(name, sensor_type)


def run_command(service: SecurityService, line: str, out: TextIO) -> None:
    """Execute a single command line."""
    tokens = shlex.split(line, comments=True)
    if not tokens:
        return

    command, args = tokens[0].lower(), tokens[1:]

    if command == "add":
        service.add_sensor(_parse_sensor(args))
    elif command == "remove":
        service.remove_sensor(_parse_sensor(args))
    elif command in ("activate", "deactivate"):
        service.set_sensor_active(_parse_sensor(args), command == "activate")
    elif command == "arm":
        if len(args) != 1 or args[0].lower() not in ARM_COMMANDS:
            raise ValueError("expected arm home|away|off")
        service.set_arming_status(ARM_COMMANDS[args[0].lower()])
    elif command == "image":
        if len(args) != 1:
            raise ValueError("expected image PATH")
        service.process_image(load_image(args[0]))
    elif command == "status":
        print(f"Alarm: {service.get_alarm_status().description}", file=out)
        print(f"Arming: {service.get_arming_status().description}", file=out)
        for sensor in sorted(service.get_sensors()):
            print(f"  {format_sensor(sensor)}", file=out)
        error_handler = service.error_handler
        for component, health in sorted(error_handler.get_component_health().items()):
            errors = error_handler.component_error_counts.get(component, 0)
            print(f"Health: {component} {health.value} ({errors} errors)", file=out)
    else:
        raise ValueError(f"unknown command: {command}")


def run_commands(service: SecurityService, lines: Iterable[str], out: TextIO) -> int:
    """Execute commands in order, returning the number of failed commands."""
    failures = 0
    for line_number, line in enumerate(lines, start=1):
        try:
            run_command(service, line, out)
        except (ValueError, SecurityError, OSError) as e:
            failures += 1
            logger.error(f"Command {line_number} failed ({line.strip()}): {e}")
            print(f"Error: {e}", file=out)
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the simulator."""
    parser = argparse.ArgumentParser(description="Home security system simulator")
    parser.add_argument("script", nargs="?", help="file with one command per line")
    parser.add_argument("-c", "--command", action="append", default=[],
                        help="command to run (repeatable)")
    parser.add_argument("--config", help="path to JSON configuration file")
    parser.add_argument("--log-level", help="override configured log level")
    args = parser.parse_args(argv)

    config_manager = ConfigManager(args.config)
    if not config_manager.validate_config():
        setup_logging(args.log_level or "INFO")
        logger.error(f"Invalid configuration in {config_manager.config_path}")
        return 2

    config = config_manager.get_config()
    setup_logging(args.log_level or config.log_level, config.log_dir)

    service = build_service(config_manager)
    service.add_status_listener(ConsoleStatusListener(sys.stdout))

    if args.command:
        lines = args.command
    elif args.script:
        with open(args.script, 'r') as f:
            lines = f.read().splitlines()
    else:
        lines = sys.stdin.read().splitlines()

    return 1 if run_commands(service, lines, sys.stdout) else 0


if __name__ == "__main__":
    sys.exit(main())
