# atlas/sa/models/history.py
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, List
from sqlalchemy import Boolean, DateTime, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base

class GenreOperation(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

class GenreHistory(Base):
    """Append-only snapshot of a genre taken after each change.

    Rows outlive the genre they describe, so genre_id is not a foreign key.
    """
    __tablename__ = 'genre_history'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    genre_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_ids: Mapped[List[int]] = mapped_column(JSON, nullable=False, default=list)
    derived_from_ids: Mapped[List[int]] = mapped_column(JSON, nullable=False, default=list)
    influenced_by_ids: Mapped[List[int]] = mapped_column(JSON, nullable=False, default=list)
    akas: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    operation: Mapped[str] = mapped_column(String(10), nullable=False)
    account_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(UTC))

    __table_args__ = (
        Index('idx_genre_history_genre_id', 'genre_id'),
    )

    @classmethod
    def from_genre(cls, genre, operation: GenreOperation, account_id: int | None = None) -> 'GenreHistory':
        return cls(
            genre_id=genre.id,
            name=genre.name,
            subtitle=genre.subtitle,
            type=genre.type,
            nsfw=genre.nsfw,
            short_description=genre.short_description,
            long_description=genre.long_description,
            notes=genre.notes,
            parent_ids=genre.parent_ids,
            derived_from_ids=genre.derived_from_ids,
            influenced_by_ids=genre.influenced_by_ids,
            akas=[{'name': aka.name, 'relevance': aka.relevance, 'order': aka.order} for aka in genre.akas],
            operation=GenreOperation(operation).value,
            account_id=account_id,
        )
