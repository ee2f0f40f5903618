# atlas/sa/__init__.py
from .database import Database
from .models import (
    Base, Genre, GenreAka, GenreRelevanceVote, GenreHistory, GenreOperation,
    genre_parent, genre_derived_from, genre_influence
)

__all__ = [
    'Database',
    'Base',
    'Genre',
    'GenreAka',
    'GenreRelevanceVote',
    'GenreHistory',
    'GenreOperation',
    'genre_parent',
    'genre_derived_from',
    'genre_influence'
]
