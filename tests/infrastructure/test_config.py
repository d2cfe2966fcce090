"""Tests for settings loading."""

from zoneinfo import ZoneInfo

import pytest

from bevpos.domain.exceptions import PersistenceUnavailableError, ValidationError
from bevpos.infrastructure.config import Settings, load_settings


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings(environ={"DATABASE_URL": "sqlite:///bevpos.db"})
        assert settings.database_url == "sqlite:///bevpos.db"
        assert settings.timezone == "America/Sao_Paulo"
        assert settings.log_level == "INFO"
        assert settings.sql_echo is False
        assert settings.tz == ZoneInfo("America/Sao_Paulo")

    def test_overrides(self):
        settings = load_settings(environ={
            "DATABASE_URL": "postgresql://u:p@db/bevpos",
            "BEVPOS_TIMEZONE": "America/Manaus",
            "BEVPOS_LOG_LEVEL": "debug",
            "BEVPOS_SQL_ECHO": "true",
        })
        assert settings.log_level == "DEBUG"
        assert settings.sql_echo is True
        assert settings.tz == ZoneInfo("America/Manaus")

    def test_missing_database_url(self):
        with pytest.raises(PersistenceUnavailableError, match="DATABASE_URL") as info:
            load_settings(environ={})
        assert "sqlite:///" in info.value.hint

    def test_env_file(self, tmp_path, monkeypatch):
        # set first so the value dotenv writes is undone after the test
        monkeypatch.setenv("DATABASE_URL", "placeholder")
        monkeypatch.delenv("DATABASE_URL")
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=sqlite:///from-dotenv.db\n")
        assert load_settings(env_file=str(env_file)).database_url == "sqlite:///from-dotenv.db"

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown time zone"):
            Settings(database_url="sqlite://", timezone="Mars/Olympus").tz
