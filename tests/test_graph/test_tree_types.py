# tests/test_graph/test_tree_types.py
import pytest
from atlas.graph import DERIVED, GenreNode, InMemoryGenreStore, format_tree_path, parse_tree_path
from atlas.graph.errors import InvalidGenreRelevanceError
from atlas.graph.types import GenreType, get_genre_relevance_text, is_valid_relevance
from graph_helpers import make_genre

def test_parse_tree_path():
    assert parse_tree_path([1, "derived", "3"]) == [GenreNode(1), DERIVED, GenreNode(3)]

@pytest.mark.parametrize("raw", [
    [1, "Derived"],
    [1.5],
    [None],
    [False],
    ["x"],
])
def test_parse_tree_path_rejects_unknown_tokens(raw):
    assert parse_tree_path(raw) is None

def test_format_tree_path():
    assert format_tree_path([GenreNode(4), DERIVED, GenreNode(9)]) == [4, "derived", 9]

def test_genre_node_equality():
    assert GenreNode(3) == GenreNode(3)
    assert GenreNode(3) != GenreNode(4)
    assert DERIVED != GenreNode(3)

def test_display_name():
    assert make_genre(1, "Pop").display_name == "Pop"
    assert make_genre(1, "Pop", subtitle="Japanese").display_name == "Pop [Japanese]"

def test_is_root():
    assert make_genre(1, "Rock").is_root
    assert not make_genre(2, "Punk", parents=[1]).is_root

def test_defaults():
    genre = make_genre(1, "Rock")
    assert genre.type == GenreType.STYLE
    assert genre.relevance == 99
    assert genre.nsfw is False
    assert genre.akas == []

@pytest.mark.parametrize("relevance,label", [
    (0, "Invented"),
    (3, "Minor"),
    (7, "Universal"),
])
def test_relevance_text(relevance, label):
    assert get_genre_relevance_text(relevance) == label

def test_relevance_text_rejects_unset():
    with pytest.raises(InvalidGenreRelevanceError):
        get_genre_relevance_text(99)

@pytest.mark.parametrize("relevance,valid", [
    (0, True),
    (7, True),
    (99, True),
    (8, False),
    (-1, False),
    (True, False),
    ("3", False),
])
def test_is_valid_relevance(relevance, valid):
    assert is_valid_relevance(relevance) is valid

def test_in_memory_store_upsert_keeps_position():
    store = InMemoryGenreStore([make_genre(1, "Rock"), make_genre(2, "Jazz")])
    store.put_genre(make_genre(1, "Rock and Roll"))

    assert len(store) == 2
    assert [genre.name for genre in store.list_all_genres()] == ["Rock and Roll", "Jazz"]

def test_in_memory_store_copies_on_write():
    genre = make_genre(1, "Rock")
    store = InMemoryGenreStore([genre])
    genre.parents.append(5)

    assert store.get_genre(1).parents == []
