# atlas/graph/errors.py
from typing import List, Optional


class GenreGraphError(Exception):
    """Base class for genre graph errors"""
    pass


class GenreNotFoundError(GenreGraphError):
    def __init__(self, genre_id: int):
        self.genre_id = genre_id
        super().__init__(f"No genre with id '{genre_id}'")


class StoreUnavailableError(GenreGraphError):
    """Raised when the backing genre store cannot be read or written"""

    def __init__(self, message: str = "Genre store unavailable"):
        super().__init__(message)


class GenreCycleError(GenreGraphError):
    """Raised when a mutation would make a genre its own ancestor.

    Attributes:
        cycle: Genre names along the offending cycle, first and last equal
    """

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"Cycle detected in genre tree:\n{format_cycle(cycle)}")


class DuplicateAkaError(GenreGraphError):
    def __init__(self, aka: str, tier: Optional[str] = None):
        self.aka = aka
        self.tier = tier
        where = f" ({tier})" if tier else ""
        super().__init__(f"Duplicate AKA '{aka}'{where}")


class InvalidGenreRelevanceError(GenreGraphError):
    def __init__(self, relevance):
        self.relevance = relevance
        super().__init__(f"Not a valid relevance: {relevance}")


def format_cycle(cycle: List[str]) -> str:
    """Render a cycle as 'A → B → A'"""
    return " → ".join(cycle)
