"""
Tests for configuration validation
"""
import pytest
from pydantic import ValidationError
from org_hierarchy.core.config import Settings


def test_prod_settings_rejects_wildcard_origins():
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="a" * 32,
        APP_ENV="prod",
        ALLOWED_ORIGINS="*"
    )

    with pytest.raises(ValueError, match="ALLOWED_ORIGINS"):
        settings.validate_production()


def test_prod_settings_rejects_short_jwt_secret():
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="short",
        APP_ENV="prod",
        ALLOWED_ORIGINS="https://example.com"
    )

    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        settings.validate_production()


def test_local_settings_allows_wildcard_origins():
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="test-key",
        APP_ENV="local",
        ALLOWED_ORIGINS="*"
    )

    settings.validate_production()
    assert settings.get_allowed_origins_list() == ["*"]


def test_allowed_origins_list_is_split():
    settings = Settings(
        DATABASE_URL="postgresql://test",
        JWT_SECRET_KEY="test-key",
        ALLOWED_ORIGINS="https://a.example.com, https://b.example.com,"
    )
    assert settings.get_allowed_origins_list() == ["https://a.example.com", "https://b.example.com"]


def test_fetch_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(
            DATABASE_URL="postgresql://test",
            JWT_SECRET_KEY="test-key",
            HIERARCHY_FETCH_TIMEOUT_SECONDS=0,
        )


def test_log_level_is_normalized():
    settings = Settings(DATABASE_URL="postgresql://test", JWT_SECRET_KEY="test-key", LOG_LEVEL="debug")
    assert settings.LOG_LEVEL == "DEBUG"
