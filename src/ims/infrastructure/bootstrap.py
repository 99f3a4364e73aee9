"""Composition root.

Builds the engine once per process from settings and hands out a fresh
unit of work per call. No domain or application module imports the
persistence package.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from ims.infrastructure.config import get_settings
from ims.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from ims.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


@lru_cache()
def session_factory() -> sessionmaker:
    settings = get_settings()
    engine = build_engine(settings.database_url, echo=settings.sql_echo)
    create_schema(engine)
    return build_session_factory(engine)


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory())


def move_history_limit() -> int:
    return get_settings().move_history_limit
