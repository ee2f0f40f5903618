"""CLI package for Genre Atlas"""
from .main import cli
from .commands.genre import genre

__all__ = ['cli', 'genre']
