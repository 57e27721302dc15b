from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from ..core.config import Settings


def make_engine(settings: Settings) -> Engine:
    # Required for SQLite (otherwise threading errors); the timeout makes a
    # second writer wait for the lock instead of failing with "database is locked"
    connect_args = {}
    if settings.DATABASE_URL.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": settings.SQLITE_BUSY_TIMEOUT}

    return create_engine(
        settings.DATABASE_URL,
        echo=False,             # set to True if you want SQL logs
        future=True,
        connect_args=connect_args,
    )


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
