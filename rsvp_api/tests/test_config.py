"""Tests for centralized configuration module."""

import os
from unittest.mock import patch


class TestRedisSettings:
    """Test Redis configuration settings."""

    def test_redis_default_values(self):
        """Test Redis settings have sensible defaults."""
        from rsvp_api.config import RedisSettings

        with patch.dict(os.environ, {}, clear=True):
            settings = RedisSettings()
            assert settings.host == "redis"
            assert settings.port == 6379
            assert settings.password == ""
            assert settings.max_connections == 200
            assert settings.socket_timeout == 5.0

    def test_redis_from_environment(self):
        """Test Redis settings can be loaded from environment."""
        from rsvp_api.config import RedisSettings

        env = {
            "REDIS_HOST": "custom-redis",
            "REDIS_PORT": "6380",
            "REDIS_PASSWORD": "secret123",
            "REDIS_SOCKET_TIMEOUT": "1.5",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = RedisSettings()
            assert settings.host == "custom-redis"
            assert settings.port == 6380
            assert settings.password == "secret123"
            assert settings.socket_timeout == 1.5


class TestPostgresSettings:
    """Test PostgreSQL configuration settings."""

    def test_postgres_default_values(self):
        from rsvp_api.config import PostgresSettings

        with patch.dict(os.environ, {}, clear=True):
            settings = PostgresSettings()
            assert settings.host == "postgres"
            assert settings.database == "events"
            assert settings.pool_max_size == 10

    def test_postgres_database_alias(self):
        from rsvp_api.config import PostgresSettings

        with patch.dict(os.environ, {"POSTGRES_DB": "catalog", "POSTGRES_USER": "reader"}, clear=True):
            settings = PostgresSettings()
            assert settings.database == "catalog"
            dsn = settings.get_dsn()
            assert "dbname=catalog" in dsn
            assert "user=reader" in dsn


class TestRsvpSettings:

    def test_defaults(self):
        from rsvp_api.config import RsvpSettings

        with patch.dict(os.environ, {}, clear=True):
            settings = RsvpSettings()
            assert settings.key_namespace == "rsvp:"
            assert settings.scan_count == 500

    def test_from_environment(self):
        from rsvp_api.config import RsvpSettings

        with patch.dict(os.environ, {"RSVP_KEY_NAMESPACE": "staging:rsvp:"}, clear=True):
            assert RsvpSettings().key_namespace == "staging:rsvp:"


class TestFlags:

    def test_flags_parse_strings(self):
        from rsvp_api.config import DebugSettings, FeatureSettings

        with patch.dict(os.environ, {"REQUEST_DEBUG": "yes", "ENABLE_EVENTS_DB": "0"}, clear=True):
            assert DebugSettings().request is True
            assert FeatureSettings().events_db is False

    def test_cors_origin(self):
        from rsvp_api.config import CorsSettings

        with patch.dict(os.environ, {}, clear=True):
            assert CorsSettings().allow_origin == "*"
        with patch.dict(os.environ, {"CORS_ALLOW_ORIGIN": "https://events.example.com"}, clear=True):
            assert CorsSettings().allow_origin == "https://events.example.com"


class TestSettingsCache:

    def test_get_settings_is_cached(self):
        from rsvp_api.config import clear_settings_cache, get_settings

        clear_settings_cache()
        assert get_settings() is get_settings()
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
