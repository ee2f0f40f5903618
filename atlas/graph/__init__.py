# atlas/graph/__init__.py
from .accessors import GenreGraph
from .cycles import BasicGenre, GenreMutation, detect_cycle, ensure_no_cycle
from .errors import (
    GenreGraphError, GenreNotFoundError, StoreUnavailableError,
    GenreCycleError, DuplicateAkaError, InvalidGenreRelevanceError, format_cycle
)
from .paths import get_path_to_genre, require_path_to_genre, is_path_valid
from .search import GenreMatch, search_genres, search_genre_matches, get_match_weight
from .store import GenreStore, InMemoryGenreStore
from .types import (
    GenreType, TreeGenre, GenreNode, DerivedMarker, DERIVED, TreeStep,
    parse_tree_path, format_tree_path, UNSET_GENRE_RELEVANCE
)

__all__ = [
    'GenreGraph',
    'BasicGenre',
    'GenreMutation',
    'detect_cycle',
    'ensure_no_cycle',
    'GenreGraphError',
    'GenreNotFoundError',
    'StoreUnavailableError',
    'GenreCycleError',
    'DuplicateAkaError',
    'InvalidGenreRelevanceError',
    'format_cycle',
    'get_path_to_genre',
    'require_path_to_genre',
    'is_path_valid',
    'GenreMatch',
    'search_genres',
    'search_genre_matches',
    'get_match_weight',
    'GenreStore',
    'InMemoryGenreStore',
    'GenreType',
    'TreeGenre',
    'GenreNode',
    'DerivedMarker',
    'DERIVED',
    'TreeStep',
    'parse_tree_path',
    'format_tree_path',
    'UNSET_GENRE_RELEVANCE'
]
