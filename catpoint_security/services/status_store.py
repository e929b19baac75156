"""Status store implementations: in-memory and sqlite-backed."""

import os
import sqlite3
from typing import Dict, Optional, Set, Tuple

from ..models.sensor import Sensor, SensorType
from ..models.status import AlarmStatus, ArmingStatus
from ..utils import ensure_directory_exists
from ..logging_config import get_logger
from .interfaces import StatusStoreInterface

logger = get_logger("status_store")


class InMemoryStatusStore(StatusStoreInterface):
    """Status store kept entirely in process memory."""

    def __init__(self,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED):
        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._sensors: Dict[Tuple[str, str], Sensor] = {}

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._alarm_status = alarm_status

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._arming_status = arming_status

    def get_sensors(self) -> Set[Sensor]:
        return set(self._sensors.values())

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.key] = sensor

    def remove_sensor(self, sensor: Sensor) -> None:
        self._sensors.pop(sensor.key, None)

    def update_sensor(self, sensor: Sensor) -> None:
        # Unknown sensors are ignored; membership is the service's concern.
        if sensor.key in self._sensors:
            self._sensors[sensor.key] = sensor


class SqliteStatusStore(StatusStoreInterface):
    """Status store persisted to a SQLite database."""

    ALARM_STATUS_KEY = "alarm_status"
    ARMING_STATUS_KEY = "arming_status"

    def __init__(self, database_path: str = "data/security.db"):
        """
        Initialize sqlite status store.

        Args:
            database_path: Path to SQLite database file
        """
        self.database_path = database_path
        self._initialize_storage()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.database_path)

    def _initialize_storage(self) -> None:
        """Initialize storage directory and database tables."""
        ensure_directory_exists(os.path.dirname(self.database_path))

        with self._connect() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS sensors (
                    name TEXT NOT NULL,
                    sensor_type TEXT NOT NULL,
                    active INTEGER NOT NULL DEFAULT 0,
                    PRIMARY KEY (name, sensor_type)
                )
            """)

            conn.commit()

        logger.debug(f"Status store initialized: {self.database_path}")

    def _get_setting(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def _set_setting(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute("""
                INSERT INTO settings (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """, (key, value))
            conn.commit()

    def get_alarm_status(self) -> AlarmStatus:
        value = self._get_setting(self.ALARM_STATUS_KEY)
        return AlarmStatus(value) if value else AlarmStatus.NO_ALARM

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        self._set_setting(self.ALARM_STATUS_KEY, alarm_status.value)

    def get_arming_status(self) -> ArmingStatus:
        value = self._get_setting(self.ARMING_STATUS_KEY)
        return ArmingStatus(value) if value else ArmingStatus.DISARMED

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        self._set_setting(self.ARMING_STATUS_KEY, arming_status.value)

    def get_sensors(self) -> Set[Sensor]:
        with self._connect() as conn:
            rows = conn.execute("SELECT name, sensor_type, active FROM sensors").fetchall()

        return {
            Sensor(name=name, sensor_type=SensorType(sensor_type), active=bool(active))
            for name, sensor_type, active in rows
        }

    def add_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO sensors (name, sensor_type, active)
                VALUES (?, ?, ?)
            """, (sensor.name, sensor.sensor_type.value, int(sensor.active)))
            conn.commit()
        logger.debug(f"Sensor stored: {sensor.name}")

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM sensors WHERE name = ? AND sensor_type = ?",
                         (sensor.name, sensor.sensor_type.value))
            conn.commit()

    def update_sensor(self, sensor: Sensor) -> None:
        with self._connect() as conn:
            conn.execute("""
                UPDATE sensors SET active = ?
                WHERE name = ? AND sensor_type = ?
            """, (int(sensor.active), sensor.name, sensor.sensor_type.value))
            conn.commit()


def create_status_store(backend: str = "memory",
                        database_path: str = "data/security.db") -> StatusStoreInterface:
    """Build the status store selected by configuration."""
    if backend == "memory":
        return InMemoryStatusStore()
    if backend == "sqlite":
        return SqliteStatusStore(database_path)
    raise ValueError(f"Unknown status store backend: {backend}")
