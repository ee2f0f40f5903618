# atlas/services/__init__.py
from .genre_service import GenreService

__all__ = ['GenreService']
