from key_registry import config
from key_registry.config import Settings, get_settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.database_url.startswith("postgresql+asyncpg://")
    assert settings.db_pool_size == 5
    assert settings.log_level == "INFO"
    assert settings.check_sample_limit == 5


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///keys.db")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("API_PORT", "9001")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite+aiosqlite:///keys.db"
    assert settings.log_level == "debug"
    assert settings.api_port == 9001


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setattr(config, "_settings", None)

    assert get_settings() is get_settings()
