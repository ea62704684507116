from sqlmodel import SQLModel, Field
from datetime import datetime
from uuid import uuid4


def _new_id() -> str:
    return uuid4().hex


class User(SQLModel, table=True):
    """Registered account; created once and never modified"""
    __tablename__ = "users"

    id: str = Field(default_factory=_new_id, primary_key=True)
    username: str = Field(unique=True, index=True)
    password_hash: str


class Task(SQLModel, table=True):
    """Task owned by exactly one user"""
    __tablename__ = "tasks"

    id: str = Field(default_factory=_new_id, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    title: str
    # Free-form; no transitions are enforced.
    status: str
    completion_date: datetime
