"""SQLAlchemy engine factory and declarative base."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # single shared connection, otherwise each session sees an empty database
            options["poolclass"] = StaticPool
        return create_engine(database_url, future=True, **options)

    return create_engine(
        database_url,
        future=True,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    # One fresh Session per request, never a scoped_session
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
