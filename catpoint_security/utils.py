"""Utility functions for the security system."""

import os
from typing import Iterable

from .models.sensor import Sensor


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def any_sensor_active(sensors: Iterable[Sensor]) -> bool:
    """Check whether at least one sensor reports active."""
    return any(sensor.active for sensor in sensors)


def format_sensor(sensor: Sensor) -> str:
    """Format a sensor for console display."""
    state = "Active" if sensor.active else "Inactive"
    return f"{sensor.name} ({sensor.sensor_type.name.title()}): {state}"
