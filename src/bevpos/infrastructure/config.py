"""Runtime settings read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import find_dotenv, load_dotenv

from bevpos.domain.exceptions import PersistenceUnavailableError, ValidationError

DEFAULT_TIMEZONE = "America/Sao_Paulo"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:

    database_url: str
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def tz(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValidationError(f"Unknown time zone '{self.timezone}' in BEVPOS_TIMEZONE") from exc


def load_settings(env_file: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from *environ* (default: ``os.environ`` after loading ``.env``)."""
    if environ is None:
        load_dotenv(env_file or find_dotenv(usecwd=True))
        environ = os.environ

    database_url = (environ.get("DATABASE_URL") or "").strip()
    if not database_url:
        raise PersistenceUnavailableError(
            "DATABASE_URL is not set",
            hint="export DATABASE_URL=sqlite:///bevpos.db or add it to a .env file",
        )

    return Settings(
        database_url=database_url,
        timezone=(environ.get("BEVPOS_TIMEZONE") or DEFAULT_TIMEZONE).strip(),
        log_level=(environ.get("BEVPOS_LOG_LEVEL") or "INFO").strip().upper(),
        sql_echo=(environ.get("BEVPOS_SQL_ECHO") or "").strip().lower() in _TRUTHY,
    )
