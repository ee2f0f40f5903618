# atlas/sa/models/__init__.py
from .base import Base, TimestampMixin
from .genre import (
    Genre, GenreAka, GenreRelevanceVote,
    genre_parent, genre_derived_from, genre_influence
)
from .history import GenreHistory, GenreOperation

__all__ = [
    'Base',
    'TimestampMixin',
    'Genre',
    'GenreAka',
    'GenreRelevanceVote',
    'GenreHistory',
    'GenreOperation',
    'genre_parent',
    'genre_derived_from',
    'genre_influence'
]
