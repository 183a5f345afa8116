"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from orderhub.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from orderhub.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)
from orderhub.infrastructure.settings import Settings


def settings() -> Settings:
    return Settings()


@lru_cache(maxsize=None)
def _session_factory(database_url: str, echo: bool) -> sessionmaker:
    return create_session_factory(create_db_engine(database_url, echo=echo))


def unit_of_work(config: Settings | None = None) -> SqlAlchemyUnitOfWork:
    config = config or settings()
    return SqlAlchemyUnitOfWork(_session_factory(config.database_url, config.echo_sql))
