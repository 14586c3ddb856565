from __future__ import annotations

import pytest

from citizen_api.core.config import get_settings
from citizen_api.core.rate_limiter import RateLimiter


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("APP_ENV", "DB_FILE", "CORS_ORIGIN", "LOG_LEVEL", "RATE_LIMIT_PER_MINUTE"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.app_env == "dev"
    assert settings.db_file == "data.sqlite"
    assert settings.cors_origins == ("http://localhost:5173",)
    assert settings.log_level == "INFO"
    assert settings.rate_limit_per_minute == 300
    assert not settings.is_production


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Production")
    monkeypatch.setenv("DB_FILE", " /var/lib/citizen/data.sqlite ")
    monkeypatch.setenv("CORS_ORIGIN", "https://a.example, https://b.example,,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "not-a-number")
    settings = get_settings()
    assert settings.is_production
    assert settings.db_file == "/var/lib/citizen/data.sqlite"
    assert settings.cors_origins == ("https://a.example", "https://b.example")
    assert settings.log_level == "DEBUG"
    assert settings.rate_limit_per_minute == 300


def test_rate_limiter_counts_per_key():
    limiter = RateLimiter(limit=2, window_seconds=60)
    assert limiter.hit("10.0.0.1")[:2] == (True, 1)
    assert limiter.hit("10.0.0.1")[:2] == (True, 0)
    assert limiter.hit("10.0.0.1")[0] is False
    assert limiter.hit("10.0.0.2")[0] is True


def test_rate_limiter_window_resets(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr("citizen_api.core.rate_limiter.time.time", lambda: clock[0])
    limiter = RateLimiter(limit=1, window_seconds=60)
    assert limiter.hit("ip")[0] is True
    assert limiter.hit("ip")[0] is False
    clock[0] += 61
    assert limiter.hit("ip")[0] is True
