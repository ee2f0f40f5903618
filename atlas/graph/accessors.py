# atlas/graph/accessors.py
from typing import Any, List, Optional, Sequence

from .paths import get_path_to_genre, is_path_valid, require_path_to_genre
from .search import GenreMatch, search_genre_matches, search_genres
from .store import GenreStore
from .types import TreeGenre, parse_tree_path


class GenreGraph:
    """Read-only view of the genre graph over a GenreStore.

    Holds no state besides the store; every call goes back to it, so results
    always reflect the store's current contents.
    """

    def __init__(self, store: GenreStore):
        self.store = store

    def get_genre(self, genre_id: int) -> Optional[TreeGenre]:
        return self.store.get_genre(genre_id)

    def get_all_genres(self) -> List[TreeGenre]:
        return self.store.list_all_genres()

    def get_root_genres(self) -> List[TreeGenre]:
        """Genres without parents, in store order"""
        return self.store.list_root_genres()

    def get_children(self, genre_id: int) -> List[TreeGenre]:
        """Genres listing genre_id among their parents"""
        return self.store.list_children(genre_id)

    def get_derivations(self, genre_id: int) -> List[TreeGenre]:
        """Genres listing genre_id among the genres they derive from"""
        return self.store.list_derivations(genre_id)

    def get_path_to_genre(self, genre_id: int) -> Optional[List[int]]:
        return get_path_to_genre(self, genre_id)

    def require_path_to_genre(self, genre_id: int) -> List[int]:
        return require_path_to_genre(self, genre_id)

    def is_path_valid(self, path: Sequence[Any]) -> bool:
        """Validate a path of tree steps or raw tokens (ints and "derived")"""
        steps = parse_tree_path(path)
        if steps is None:
            return False
        return is_path_valid(self, steps)

    def search(self, query: str) -> List[TreeGenre]:
        return search_genres(self, query)

    def search_matches(self, query: str) -> List[GenreMatch]:
        return search_genre_matches(self.get_all_genres(), query)
