import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from my_todo.core.exceptions import Unexpected

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_session_factory(database_url: str, **kwargs) -> sessionmaker:
    """Build an engine for ``database_url`` and return a sessionmaker bound to it."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        if ":memory:" in database_url or database_url == "sqlite://":
            # every session must see the same in-memory database
            kwargs.setdefault("poolclass", StaticPool)
        engine = create_engine(database_url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        engine = create_engine(database_url, **kwargs)

    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@contextmanager
def translate_errors():
    """Re-raise driver and ORM failures as ``Unexpected``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Storage failure: %s", exc)
        raise Unexpected(str(exc)) from exc
