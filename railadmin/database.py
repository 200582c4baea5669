import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from .config import get_database_url

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(database_url=None, **kwargs):
    return create_engine(database_url or get_database_url(), **kwargs)


def make_session_factory(engine):
    return sessionmaker(autoflush=False, autocommit=False, bind=engine)


def init_db(engine):
    # models must be imported so their tables are registered on Base
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def connect(engine=None) -> Session | None:
    """Open the process-wide session.

    Returns None when the store is unreachable (missing driver, bad
    credentials, server down); callers then run in memory mode.
    """
    try:
        if engine is None:
            engine = make_engine()
        init_db(engine)
        return make_session_factory(engine)()
    except (SQLAlchemyError, ImportError) as e:
        logger.error("Database connection error: %s", e)
        return None


def close(db: Session | None):
    if db is None:
        return
    try:
        db.close()
    except SQLAlchemyError as e:
        logger.error("Error closing database session: %s", e)
