# atlas/graph/search.py
import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional

from anyascii import anyascii

from .types import TreeGenre

WEIGHT_THRESHOLD = 0.2

_WHITESPACE = re.compile(r"\s+")


@dataclass
class GenreMatch:
    id: int
    genre: TreeGenre
    weight: float
    matched_aka: Optional[str] = None


def to_ascii(s: str) -> str:
    """Transliterate any script to plain ASCII ('рок' -> 'rok', 'ß' -> 'ss')"""
    return anyascii(s)


def to_filter_string(s: str) -> str:
    return to_ascii(s.lower())


def _bigrams(s: str) -> Counter:
    return Counter(s[i:i + 2] for i in range(len(s) - 1))


def dice_coefficient(first: str, second: str) -> float:
    """Bigram similarity of two strings in [0, 1], ignoring whitespace"""
    first = _WHITESPACE.sub("", first)
    second = _WHITESPACE.sub("", second)

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    intersection = sum((_bigrams(first) & _bigrams(second)).values())
    return (2.0 * intersection) / (len(first) + len(second) - 2)


def get_match_weight(name: str, query: str) -> float:
    f_name = to_filter_string(name)
    f_query = to_filter_string(query)

    # Nothing left to compare, e.g. a blank query
    if not f_query or not f_name:
        return 0.0

    # Bigrams say nothing about one-letter strings
    if len(f_name) < 2 or len(f_query) < 2:
        if f_name.startswith(f_query):
            return 1.0
        elif f_query in f_name:
            return 0.5
        return 0.0

    return dice_coefficient(f_name, f_query)


def search_genre_matches(genres: Iterable[TreeGenre], query: str) -> List[GenreMatch]:
    """Score every genre against a query and keep the ones above the threshold.

    A genre's weight is the best of its display name and its akas; an aka
    only wins when it scores strictly higher, and is then reported as
    matched_aka.

    Returns:
        Matches ordered by weight (highest first), then by name case-insensitively
    """
    matches: List[GenreMatch] = []

    for genre in genres:
        match = GenreMatch(id=genre.id, genre=genre, weight=get_match_weight(genre.display_name, query))

        for aka in genre.akas:
            aka_weight = get_match_weight(aka, query)
            if aka_weight > match.weight:
                match = GenreMatch(id=genre.id, genre=genre, weight=aka_weight, matched_aka=aka)

        if match.weight >= WEIGHT_THRESHOLD:
            matches.append(match)

    return sorted(matches, key=lambda m: (-m.weight, m.genre.name.lower()))


def search_genres(graph, query: str) -> List[TreeGenre]:
    """Fuzzy search over the full genre listing, returning ranked genres"""
    return [match.genre for match in search_genre_matches(graph.get_all_genres(), query)]
