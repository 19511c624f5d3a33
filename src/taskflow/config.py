"""Settings for TaskFlow, loaded from environment variables (+ optional .env)."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=False)

ENV_PREFIX = "TASKFLOW"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """TaskFlow configuration."""
    store_url: str = "http://localhost:8080/api"
    project_id: str = ""
    public_key: str = ""
    http_timeout: float = 30.0
    tasks_collection: str = "task"
    preferences_collection: str = "user_preference"
    tags_collection: str = "task_tag"
    notification_ttl: float = 3.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            store_url=os.getenv(_k("STORE_URL"), "http://localhost:8080/api").rstrip("/"),
            project_id=os.getenv(_k("PROJECT_ID"), ""),
            public_key=os.getenv(_k("PUBLIC_KEY"), ""),
            http_timeout=_env_float(_k("HTTP_TIMEOUT"), 30.0),
            tasks_collection=os.getenv(_k("TASKS_COLLECTION"), "task"),
            preferences_collection=os.getenv(_k("PREFERENCES_COLLECTION"), "user_preference"),
            tags_collection=os.getenv(_k("TAGS_COLLECTION"), "task_tag"),
            notification_ttl=_env_float(_k("NOTIFICATION_TTL"), 3.0),
            log_level=os.getenv(_k("LOG_LEVEL"), "INFO").upper(),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
