"""Shared JSON configuration storage."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from car_sharing.config import DB_TIMEOUT_SECONDS


@dataclass(frozen=True)
class StoreSettings:
    """Persisted settings for the entity store."""

    database_path: Optional[Path] = None
    db_timeout_seconds: float = DB_TIMEOUT_SECONDS
    log_level: str = "INFO"


def load_config_data(config_path: Path) -> dict[str, Any]:
    """Load configuration JSON data from disk."""
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    if isinstance(data, dict):
        return data
    return {}


def save_config_data(config_path: Path, data: dict[str, Any]) -> None:
    """Persist configuration JSON data to disk."""
    config_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
    )


def load_store_settings(config_path: Path) -> StoreSettings:
    """Load store settings from disk, falling back to defaults."""
    data = load_config_data(config_path)
    raw_path = data.get("database_path")
    try:
        timeout = float(data.get("db_timeout_seconds", DB_TIMEOUT_SECONDS))
    except (TypeError, ValueError):
        timeout = DB_TIMEOUT_SECONDS
    return StoreSettings(
        database_path=Path(raw_path) if raw_path else None,
        db_timeout_seconds=timeout,
        log_level=str(data.get("log_level", "INFO")).upper(),
    )


def save_store_settings(config_path: Path, settings: StoreSettings) -> None:
    """Save store settings to disk, keeping unrelated keys."""
    payload = load_config_data(config_path)
    payload["database_path"] = (
        str(settings.database_path) if settings.database_path else None
    )
    payload["db_timeout_seconds"] = settings.db_timeout_seconds
    payload["log_level"] = settings.log_level
    save_config_data(config_path, payload)
