from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, SQLModel, Session
import models  # noqa: F401


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine shared by every request of one app

    In-memory SQLite gets a single static connection so that all sessions
    see the same database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)

    return create_engine(database_url, echo=echo)


def create_db_and_tables(engine: Engine):
    """Create all tables in the database"""

    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """Get database session - used as FastAPI dependency"""
    with Session(request.app.state.engine) as session:
        yield session
