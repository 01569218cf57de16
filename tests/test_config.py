"""Settings: environment-driven configuration."""

from cms_core.config import TEST_DATABASE_URL, Settings, get_settings


def test_postgres_url_rewritten_for_asyncpg(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://cms:cms@db:5432/cms")
    settings = Settings()
    assert settings.database_url == "postgresql+asyncpg://cms:cms@db:5432/cms"
    assert not settings.is_sqlite


def test_test_env_defaults_to_memory_db(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("APP_ENV", "test")
    settings = Settings()
    assert settings.database_url == TEST_DATABASE_URL
    assert settings.is_sqlite


def test_explicit_url_wins_in_test_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///other.db")
    assert Settings().database_url == "sqlite+aiosqlite:///other.db"


def test_dev_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("APP_ENV", "dev")
    settings = Settings()
    assert settings.database_url == "sqlite+aiosqlite:///cms_dev.db"
    assert settings.database_pool_size == 20
    assert settings.log_format == "json"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
