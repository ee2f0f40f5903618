# atlas/graph/paths.py
"""Shortest root-to-genre paths and breadcrumb path validation."""
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, Set

from .errors import GenreNotFoundError
from .types import DERIVED, GenreNode, TreeGenre, TreeStep


def _ids(genres: Sequence[TreeGenre]) -> Set[int]:
    return {genre.id for genre in genres}


def get_path_to_genre(graph, genre_id: int) -> Optional[List[int]]:
    """Find the shortest path from any root genre down to a genre.

    Breadth-first search seeded with every root at once, so the first
    predecessor recorded for a genre lies on a shortest path. Ties go to
    whichever root/child the store lists first.

    Args:
        graph: Object exposing get_genre, get_root_genres and get_children
        genre_id: ID of the target genre

    Returns:
        Genre IDs from root to target inclusive, or None if the genre does not
        exist or cannot be reached from a root
    """
    genre = graph.get_genre(genre_id)
    if genre is None:
        return None

    if not genre.parents:
        return [genre_id]

    # Maps each visited genre to its predecessor; roots map to None
    predecessors: Dict[int, Optional[int]] = {}
    queue: Deque[int] = deque()

    for root in graph.get_root_genres():
        if root.id not in predecessors:
            predecessors[root.id] = None
            queue.append(root.id)

    while queue and genre_id not in predecessors:
        current = queue.popleft()
        for child in graph.get_children(current):
            if child.id not in predecessors:
                predecessors[child.id] = current
                queue.append(child.id)

    if genre_id not in predecessors:
        return None

    path: List[int] = []
    current: Optional[int] = genre_id
    while current is not None:
        path.append(current)
        current = predecessors[current]

    path.reverse()
    return path


def require_path_to_genre(graph, genre_id: int) -> List[int]:
    """Like get_path_to_genre but raises GenreNotFoundError instead of returning None"""
    path = get_path_to_genre(graph, genre_id)
    if path is None:
        raise GenreNotFoundError(genre_id)
    return path


def is_path_valid(graph, path: Sequence[TreeStep]) -> bool:
    """Check an untrusted breadcrumb path against the tree and derivation edges.

    A path starts at a root genre. Each following genre must be a child of
    the genre before it, unless the step before it is the DERIVED marker, in
    which case it must be a derivation of the genre before the marker. A
    DERIVED marker must follow a genre that has at least one derivation.
    """
    if not path:
        return False

    root = path[0]
    if not isinstance(root, GenreNode):
        return False
    if root.id not in _ids(graph.get_root_genres()):
        return False

    for i in range(len(path) - 1, -1, -1):
        current = path[i]
        parent = path[i - 1] if i >= 1 else None
        grandparent = path[i - 2] if i >= 2 else None

        if current is DERIVED:
            if parent is None or parent is DERIVED:
                return False
            if not graph.get_derivations(parent.id):
                return False

        elif parent is DERIVED:
            if grandparent is None or grandparent is DERIVED:
                return False
            derivations = graph.get_derivations(grandparent.id)
            if not derivations or current.id not in _ids(derivations):
                return False

        else:
            if parent is None:
                continue
            children = graph.get_children(parent.id)
            if not children or current.id not in _ids(children):
                return False

    return True
