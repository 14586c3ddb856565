"""
Configuration helpers for the citizen services backend.

Settings are read from environment variables once, at process start, so that
routers/services/bootstrap never touch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_file: str
    cors_origins: tuple[str, ...]
    log_level: str
    rate_limit_per_minute: int

    @property
    def is_production(self) -> bool:
        return self.app_env in {"prod", "production"}


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        db_file=(os.getenv("DB_FILE") or "data.sqlite").strip(),
        cors_origins=_csv(os.getenv("CORS_ORIGIN", "http://localhost:5173")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        rate_limit_per_minute=_int(os.getenv("RATE_LIMIT_PER_MINUTE", "300"), 300),
    )
