# clickbeard/db.py

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlmodel import SQLModel, create_engine, Session

from .config import settings

logger = logging.getLogger(__name__)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # required for SQLite + FastAPI

# Engine = connection to the database
engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=connect_args,
)


def init_db(bind=None):
    # import so every table is registered on the metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Run a multi-statement write as a single unit.

    Commits when the block exits cleanly. Any exception rolls back every
    statement issued inside the block and is re-raised to the caller.
    """
    try:
        yield session
        session.commit()
    except Exception:
        logger.warning("Rolling back transaction")
        session.rollback()
        raise
