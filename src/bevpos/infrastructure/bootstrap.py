"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from bevpos.domain.model.calendar import StoreCalendar
from bevpos.infrastructure.config import Settings
from bevpos.infrastructure.persistence.database import (
    create_engine_for,
    create_session_factory,
    install_schema,
)
from bevpos.infrastructure.persistence.unit_of_work import SqlUnitOfWork


class Container:
    """Process-wide engine and calendar; hands out a fresh unit of work per call."""

    def __init__(self, engine: Engine, calendar: StoreCalendar) -> None:
        self.engine = engine
        self.calendar = calendar
        self._session_factory: sessionmaker = create_session_factory(engine)

    def uow(self) -> SqlUnitOfWork:
        return SqlUnitOfWork(self._session_factory)

    def install_schema(self) -> list[str]:
        return install_schema(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def build_container(settings: Settings) -> Container:
    engine = create_engine_for(settings.database_url, echo=settings.sql_echo)
    return Container(engine=engine, calendar=StoreCalendar(tz=settings.tz))
