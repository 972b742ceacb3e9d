"""Database models for the counter service."""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Primary key of the single counter record
COUNTER_ID = 1


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Counter(Base):
    """The singleton counter record."""

    __tablename__ = "counters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    value: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Counter(id={self.id}, value={self.value})>"
