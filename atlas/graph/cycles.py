# atlas/graph/cycles.py
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from .errors import GenreCycleError

logger = logging.getLogger(__name__)

# Stand-in id for a genre that has not been persisted yet
NEW_GENRE_ID = -1


@dataclass
class BasicGenre:
    """Just enough of a genre to walk parent edges"""
    id: int
    name: str
    parents: List[int] = field(default_factory=list)


@dataclass
class GenreMutation:
    """A proposed create or edit, as far as parent edges are concerned.

    parents replaces the genre's parent set when given. children adds the
    genre as a parent of each listed genre when given.
    """
    name: str
    id: Optional[int] = None
    parents: Optional[Sequence[int]] = None
    children: Optional[Sequence[int]] = None


def _apply_mutation(genres: Iterable, mutation: GenreMutation) -> Dict[int, BasicGenre]:
    nodes: Dict[int, BasicGenre] = {
        genre.id: BasicGenre(genre.id, genre.name, list(genre.parents))
        for genre in genres
    }

    genre_id = mutation.id if mutation.id is not None else NEW_GENRE_ID
    if genre_id not in nodes:
        nodes[genre_id] = BasicGenre(genre_id, mutation.name, list(mutation.parents or []))

    if mutation.parents is not None:
        nodes[genre_id].parents = list(mutation.parents)

    if mutation.children is not None:
        for child_id in mutation.children:
            child = nodes.get(child_id)
            if child is not None and genre_id not in child.parents:
                child.parents.append(genre_id)

    return nodes


def _find_cycle(start: int, nodes: Dict[int, BasicGenre], cleared: Set[int]) -> Optional[List[int]]:
    stack: List[int] = []
    on_stack: Set[int] = set()

    def visit(genre_id: int) -> Optional[List[int]]:
        if genre_id in on_stack:
            return stack + [genre_id]
        if genre_id in cleared:
            return None

        stack.append(genre_id)
        on_stack.add(genre_id)

        node = nodes.get(genre_id)
        for parent_id in node.parents if node else []:
            cycle = visit(parent_id)
            if cycle:
                return cycle

        stack.pop()
        on_stack.discard(genre_id)
        # Every path up from here is acyclic
        cleared.add(genre_id)
        return None

    return visit(start)


def detect_cycle(genres: Iterable, mutation: GenreMutation) -> Optional[List[str]]:
    """Check whether applying a mutation would create a parent cycle.

    Args:
        genres: Current genres, each with id, name and parents
        mutation: The proposed change

    Returns:
        Genre names along the DFS stack ending in the repeated genre, or
        None if the parent graph stays acyclic
    """
    nodes = _apply_mutation(genres, mutation)

    cleared: Set[int] = set()
    for genre_id in nodes:
        cycle = _find_cycle(genre_id, nodes, cleared)
        if cycle:
            return [nodes[i].name if i in nodes else str(i) for i in cycle]

    return None


def ensure_no_cycle(genres: Iterable, mutation: GenreMutation) -> None:
    """Raise GenreCycleError if the mutation would introduce a cycle"""
    cycle = detect_cycle(genres, mutation)
    if cycle:
        logger.warning(f"Rejected change to genre '{mutation.name}': cycle {cycle}")
        raise GenreCycleError(cycle)
