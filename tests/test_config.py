"""Tests for application settings."""

from urlshortener.core.config import DEFAULT_HASH_SALT, Settings


def test_base_url_trailing_slash_stripped():
    settings = Settings(BASE_URL="https://sho.rt/")
    assert settings.BASE_URL == "https://sho.rt"


def test_empty_hash_salt_means_random():
    assert Settings(HASH_SALT="").HASH_SALT is None
    assert Settings(HASH_SALT="   ").HASH_SALT is None


def test_hash_salt_kept():
    assert Settings(HASH_SALT="my-salt").HASH_SALT == "my-salt"


def test_default_salt_allowed_in_production():
    settings = Settings(ENVIRONMENT="production", HASH_SALT=DEFAULT_HASH_SALT)
    assert settings.HASH_SALT == DEFAULT_HASH_SALT


def test_is_sqlite():
    assert Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:").is_sqlite
    assert not Settings(DATABASE_URL="postgresql+asyncpg://u:p@db/x").is_sqlite


def test_unset_hash_salt_uses_default(monkeypatch):
    monkeypatch.delenv("HASH_SALT", raising=False)
    assert Settings(_env_file=None).HASH_SALT == DEFAULT_HASH_SALT


def test_url_length_is_not_a_setting():
    assert "URL_MAX_LENGTH" not in Settings.model_fields
