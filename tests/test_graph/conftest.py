# tests/test_graph/conftest.py
import pytest
from graph_helpers import make_genre, make_graph

@pytest.fixture
def chain_graph():
    """Root(0) -> 1 -> 2 -> 3"""
    return make_graph(
        make_genre(0, "Rock"),
        make_genre(1, "Hard Rock", parents=[0]),
        make_genre(2, "Heavy Metal", parents=[1]),
        make_genre(3, "Doom Metal", parents=[2]),
    )

@pytest.fixture
def derivation_graph():
    """Two roots; Electronic(10) -> House(11); Disco(20) with House derived from Disco"""
    return make_graph(
        make_genre(10, "Electronic"),
        make_genre(11, "House", parents=[10], derived_from=[20]),
        make_genre(12, "Deep House", parents=[11]),
        make_genre(20, "Disco"),
        make_genre(21, "Nu-Disco", parents=[20]),
    )
