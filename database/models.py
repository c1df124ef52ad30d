"""
SQLAlchemy ORM models for users and their tasks.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    TypeDecorator,
)
from sqlalchemy.orm import DeclarativeBase, relationship

# SQLite only autoincrements INTEGER primary keys.
_PK = BigInteger().with_variant(Integer, "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp that always comes back in UTC.

    SQLite drops tzinfo on storage, so naive values read back are UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    pass


class TaskCategory(str, enum.Enum):
    PERSONAL = "Personal"
    WORK = "Work"
    SHOPPING = "Shopping"
    OTHER = "Other"


class User(Base):
    __tablename__ = "users"

    id = Column(_PK, primary_key=True, autoincrement=True)
    username = Column(String(128), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    token = Column(Text, nullable=True)
    created_at = Column(UTCDateTime(), default=_utcnow)

    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_owner_created", "owner_id", "created_at"),)

    id = Column(_PK, primary_key=True, autoincrement=True)
    owner_id = Column(_PK, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    category = Column(
        Enum(TaskCategory, values_callable=lambda e: [m.value for m in e], name="task_category"),
        nullable=False,
        default=TaskCategory.PERSONAL,
    )
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime(), nullable=False, default=_utcnow)
    updated_at = Column(UTCDateTime(), nullable=False, default=_utcnow)

    owner = relationship("User", back_populates="tasks")
