# tests/test_graph/test_fuzzy_search.py
import pytest
from atlas.graph.search import (
    WEIGHT_THRESHOLD, dice_coefficient, get_match_weight, search_genre_matches, to_filter_string
)
from graph_helpers import make_genre, make_graph

def names(genres):
    return [genre.name for genre in genres]

def test_exact_name_ranks_first():
    graph = make_graph(make_genre(1, "pop"), make_genre(2, "rock"), make_genre(3, "rap"))
    assert names(graph.search("rock")) == ["rock"]

def test_match_is_case_insensitive():
    graph = make_graph(make_genre(1, "Rock"), make_genre(2, "Rockabilly"))
    results = graph.search_matches("rock")

    assert results[0].genre.name == "Rock"
    assert results[0].weight == 1.0
    assert names(graph.search("ROCK"))[0] == "Rock"

def test_below_threshold_is_excluded():
    graph = make_graph(make_genre(1, "Jazz"), make_genre(2, "Rock"))
    assert names(graph.search("rock")) == ["Rock"]

def test_no_matches_is_empty():
    graph = make_graph(make_genre(1, "Jazz"))
    assert graph.search("zzzz") == []

def test_threshold_is_inclusive():
    assert dice_coefficient("abcdef", "efghij") == WEIGHT_THRESHOLD
    graph = make_graph(make_genre(1, "abcdef"))
    assert names(graph.search("efghij")) == ["abcdef"]

def test_aka_outranks_name():
    edm = make_genre(1, "Electronic Dance Music", akas=["EDM"])
    results = search_genre_matches([edm], "edm")

    assert len(results) == 1
    assert results[0].weight == 1.0
    assert results[0].matched_aka == "EDM"

def test_aka_with_equal_weight_is_not_recorded():
    rock = make_genre(1, "Rock", akas=["rock"])
    results = search_genre_matches([rock], "rock")
    assert results[0].matched_aka is None

def test_ties_break_on_name_case_insensitively():
    genres = [
        make_genre(1, "beta", akas=["shoegaze"]),
        make_genre(2, "Alpha", akas=["shoegaze"]),
        make_genre(3, "Gamma", akas=["shoegaze"]),
    ]
    results = search_genre_matches(genres, "shoegaze")
    assert [match.id for match in results] == [2, 1, 3]

def test_subtitle_is_part_of_compared_name():
    graph = make_graph(
        make_genre(1, "Pop", subtitle="Japanese"),
        make_genre(2, "Pop"),
    )
    results = graph.search_matches("pop")

    assert [match.id for match in results] == [2, 1]
    assert results[0].weight == 1.0
    assert results[1].weight == pytest.approx(4 / 14)

def test_single_character_query_uses_prefix_and_substring():
    graph = make_graph(
        make_genre(1, "Trance"),
        make_genre(2, "Pop"),
        make_genre(3, "Rock"),
    )
    results = graph.search_matches("r")

    assert [(match.genre.name, match.weight) for match in results] == [("Rock", 1.0), ("Trance", 0.5)]

def test_accents_are_folded():
    graph = make_graph(make_genre(1, "Música Popular Brasileira"), make_genre(2, "Café Jazz"))
    assert names(graph.search("musica popular brasileira")) == ["Música Popular Brasileira"]
    assert graph.search_matches("cafe jazz")[0].weight == 1.0

def test_cyrillic_query_matches_only_cyrillic_genre():
    graph = make_graph(make_genre(1, "Jazz"), make_genre(2, "Pop"), make_genre(3, "Русский рок"))
    assert names(graph.search("рок")) == ["Русский рок"]

def test_non_latin_names_are_transliterated():
    graph = make_graph(
        make_genre(1, "Straße"),
        make_genre(2, "Øresund Sound"),
        make_genre(3, "Русский рок"),
    )
    assert names(graph.search("strasse")) == ["Straße"]
    assert names(graph.search("oresund sound")) == ["Øresund Sound"]
    assert names(graph.search("Русский рок")) == ["Русский рок"]

def test_blank_query_matches_nothing():
    graph = make_graph(make_genre(1, "Jazz"), make_genre(2, "Pop"))
    assert graph.search("") == []
    assert graph.search("   ") == []

@pytest.mark.parametrize("value,expected", [
    ("Rock", "rock"),
    ("Électro", "electro"),
    ("Mötley", "motley"),
    ("J-Pop", "j-pop"),
    ("Straße", "strasse"),
    ("Øresund", "oresund"),
])
def test_to_filter_string(value, expected):
    assert to_filter_string(value) == expected

@pytest.mark.parametrize("first,second,expected", [
    ("night", "nacht", 0.25),
    ("aaaa", "aaa", 0.8),
    ("a", "a", 1.0),
    ("a", "b", 0.0),
    ("post rock", "postrock", 1.0),
    ("rock", "", 0.0),
])
def test_dice_coefficient(first, second, expected):
    assert dice_coefficient(first, second) == pytest.approx(expected)

def test_match_weight_short_name():
    assert get_match_weight("X", "x") == 1.0
    assert get_match_weight("X", "xy") == 0.0
