"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass

from car_sharing.version import __app_name__, __company__

APP_NAME = __app_name__
APP_HOME_ENV = "CAR_SHARING_HOME"
APP_HOME_DIRNAME = ".car_sharing"
DB_FILENAME = "car_sharing.db"
DB_TIMEOUT_SECONDS = 5.0
LOGS_DIRNAME = "logs"
LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
CONFIG_FILENAME = "config.json"

PLATE_MIN_LENGTH = 4
PLATE_MAX_LENGTH = 9


@dataclass(frozen=True)
class AppConfig:
    """Static configuration values for CarSharing."""

    app_name: str = APP_NAME
    organization_name: str = __company__
    db_timeout_seconds: float = DB_TIMEOUT_SECONDS
