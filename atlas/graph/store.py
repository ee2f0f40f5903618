# atlas/graph/store.py
from copy import deepcopy
from typing import Dict, Iterable, List, Optional, Protocol

from .types import TreeGenre


class GenreStore(Protocol):
    """Read/write primitives the graph engine needs from a backing store.

    Any call may raise StoreUnavailableError; the engine never catches it.
    """

    def list_all_genres(self) -> List[TreeGenre]: ...

    def list_root_genres(self) -> List[TreeGenre]: ...

    def list_children(self, parent_id: int) -> List[TreeGenre]: ...

    def list_derivations(self, source_id: int) -> List[TreeGenre]: ...

    def get_genre(self, genre_id: int) -> Optional[TreeGenre]: ...

    def put_genre(self, genre: TreeGenre) -> None: ...


class InMemoryGenreStore:
    """Genre store backed by a dict, iterating in insertion order."""

    def __init__(self, genres: Optional[Iterable[TreeGenre]] = None):
        self._genres: Dict[int, TreeGenre] = {}
        for genre in genres or []:
            self.put_genre(genre)

    def __len__(self) -> int:
        return len(self._genres)

    def list_all_genres(self) -> List[TreeGenre]:
        return list(self._genres.values())

    def list_root_genres(self) -> List[TreeGenre]:
        return [genre for genre in self._genres.values() if not genre.parents]

    def list_children(self, parent_id: int) -> List[TreeGenre]:
        return [genre for genre in self._genres.values() if parent_id in genre.parents]

    def list_derivations(self, source_id: int) -> List[TreeGenre]:
        return [genre for genre in self._genres.values() if source_id in genre.derived_from]

    def get_genre(self, genre_id: int) -> Optional[TreeGenre]:
        return self._genres.get(genre_id)

    def put_genre(self, genre: TreeGenre) -> None:
        # Upsert keeps the original position of an existing id
        self._genres[genre.id] = deepcopy(genre)
