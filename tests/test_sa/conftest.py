# tests/test_sa/conftest.py
import pytest
from atlas.graph.types import AKA_TIERS
from atlas.sa.models import Genre, GenreAka

@pytest.fixture
def sample_genre(db_session):
    """Create a sample genre for testing."""
    genre = Genre(name="Test Genre")
    db_session.add(genre)
    db_session.commit()
    return genre

@pytest.fixture
def genre_tree(db_session):
    """Create a small genre graph for testing.

    Rock -> Hard Rock -> Heavy Metal, Rock -> Punk
    Electronic -> House, with House derived from Disco
    """
    rock = Genre(name="Rock")
    electronic = Genre(name="Electronic")
    disco = Genre(name="Disco")
    db_session.add_all([rock, electronic, disco])
    db_session.flush()

    hard_rock = Genre(name="Hard Rock", parents=[rock])
    punk = Genre(name="Punk", parents=[rock])
    house = Genre(name="House", parents=[electronic], derived_from=[disco])
    db_session.add_all([hard_rock, punk, house])
    db_session.flush()

    heavy_metal = Genre(
        name="Heavy Metal",
        parents=[hard_rock],
        akas=[
            GenreAka(name="Metal", relevance=AKA_TIERS["primary"], order=0),
            GenreAka(name="HM", relevance=AKA_TIERS["tertiary"], order=0),
        ]
    )
    db_session.add(heavy_metal)
    db_session.commit()

    return {
        "rock": rock,
        "electronic": electronic,
        "disco": disco,
        "hard_rock": hard_rock,
        "punk": punk,
        "house": house,
        "heavy_metal": heavy_metal,
    }
