"""Database engine and session management for the problem table."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session as DBSession, sessionmaker

from server.config import Settings
from server.db.models import Base

logger = logging.getLogger("leetrepeat.storage")

# One engine and session factory per database URL.
_engines: Dict[str, Engine] = {}
_factories: Dict[str, sessionmaker] = {}


def get_engine(settings: Settings) -> Engine:
    url = settings.database_url
    engine = _engines.get(url)
    if engine is None:
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            if parsed.database not in (None, "", ":memory:"):
                Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(url, connect_args={"check_same_thread": False})
        else:
            engine = create_engine(url)
        logger.debug("Created engine for %s", parsed.render_as_string(hide_password=True))
        _engines[url] = engine
    return engine


def get_session_factory(settings: Settings) -> sessionmaker:
    url = settings.database_url
    factory = _factories.get(url)
    if factory is None:
        factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine(settings))
        _factories[url] = factory
    return factory


@contextmanager
def get_db(settings: Settings) -> Generator[DBSession, None, None]:
    """Yield a session; commits on success, rolls back and re-raises on error."""
    session = get_session_factory(settings)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose every cached engine. Use between tests for isolation."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
    _factories.clear()


def init_db(settings: Settings) -> None:
    """Create the problems table if missing."""
    Base.metadata.create_all(bind=get_engine(settings))
