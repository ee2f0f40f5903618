# atlas/sa/repositories/__init__.py
from .genre import GenreRepository

__all__ = ['GenreRepository']
