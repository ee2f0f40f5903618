# atlas/graph/types.py
from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Iterable, List, Optional, Union

from .errors import InvalidGenreRelevanceError


class GenreType(str, Enum):
    TREND = "TREND"
    SCENE = "SCENE"
    STYLE = "STYLE"
    META = "META"
    MOVEMENT = "MOVEMENT"


MIN_GENRE_RELEVANCE = 0
MAX_GENRE_RELEVANCE = 7
UNSET_GENRE_RELEVANCE = 99

MIN_AKA_RELEVANCE = 1
MAX_AKA_RELEVANCE = 3

# AKA tiers keyed by name, most relevant first
AKA_TIERS = {
    "primary": 3,
    "secondary": 2,
    "tertiary": 1,
}

RELEVANCE_LABELS = {
    0: "Invented",
    1: "Unknown",
    2: "Unestablished",
    3: "Minor",
    4: "Significant",
    5: "Major",
    6: "Essential",
    7: "Universal",
}


def get_genre_relevance_text(relevance: int) -> str:
    if relevance not in RELEVANCE_LABELS:
        raise InvalidGenreRelevanceError(relevance)
    return RELEVANCE_LABELS[relevance]


def is_valid_relevance(relevance: Any) -> bool:
    if isinstance(relevance, bool) or not isinstance(relevance, int):
        return False
    return (
        MIN_GENRE_RELEVANCE <= relevance <= MAX_GENRE_RELEVANCE
        or relevance == UNSET_GENRE_RELEVANCE
    )


@dataclass
class TreeGenre:
    """A genre as seen by the graph engine: identity, labels and edges."""
    id: int
    name: str
    parents: List[int] = field(default_factory=list)
    derived_from: List[int] = field(default_factory=list)
    subtitle: Optional[str] = None
    type: GenreType = GenreType.STYLE
    relevance: int = UNSET_GENRE_RELEVANCE
    nsfw: bool = False
    akas: List[str] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_root(self) -> bool:
        return len(self.parents) == 0

    @property
    def display_name(self) -> str:
        if self.subtitle:
            return f"{self.name} [{self.subtitle}]"
        return self.name


# Path elements

@dataclass(frozen=True)
class GenreNode:
    id: int


class DerivedMarker(Enum):
    DERIVED = "derived"

    def __repr__(self) -> str:
        return "DERIVED"


DERIVED = DerivedMarker.DERIVED

TreeStep = Union[GenreNode, DerivedMarker]


def parse_tree_path(raw: Iterable[Any]) -> Optional[List[TreeStep]]:
    """Convert raw path tokens into tree steps.

    Accepts ints, digit strings and the literal "derived". Returns None when
    any token is not recognised.
    """
    steps: List[TreeStep] = []
    for token in raw:
        if isinstance(token, (GenreNode, DerivedMarker)):
            steps.append(token)
        elif isinstance(token, bool):
            return None
        elif isinstance(token, int):
            steps.append(GenreNode(token))
        elif isinstance(token, str):
            token = token.strip()
            if token == DERIVED.value:
                steps.append(DERIVED)
            elif token.lstrip("-").isdigit():
                steps.append(GenreNode(int(token)))
            else:
                return None
        else:
            return None
    return steps


def format_tree_path(path: Iterable[TreeStep]) -> List[Union[int, str]]:
    """Inverse of parse_tree_path, for JSON output"""
    return [DERIVED.value if step is DERIVED else step.id for step in path]
