# tests/test_sa/test_repositories/test_genre_repository.py

import pytest
from atlas.graph.cycles import BasicGenre
from atlas.sa.repositories.genre import GenreRepository
from atlas.sa.models import Genre, GenreHistory, GenreOperation

@pytest.fixture
def genre_repo(db_session):
    """Fixture to create a GenreRepository instance."""
    return GenreRepository(db_session)

def test_get_by_id(genre_repo, sample_genre):
    """Test fetching a genre by its ID."""
    fetched = genre_repo.get_by_id(sample_genre.id)
    assert fetched is not None
    assert fetched.name == "Test Genre"

def test_get_by_nonexistent_id(genre_repo):
    assert genre_repo.get_by_id(12345) is None

def test_get_by_name(genre_repo, db_session):
    """Test fetching a genre by its name."""
    genre = Genre(name="Shoegaze")
    db_session.add(genre)
    db_session.commit()

    fetched = genre_repo.get_by_name("Shoegaze")
    assert fetched is not None
    assert fetched.id == genre.id

def test_get_by_nonexistent_name(genre_repo):
    """Test fetching a genre with non-existent name."""
    assert genre_repo.get_by_name("Nonexistent Genre") is None

def test_get_by_ids(genre_repo, genre_tree):
    rock = genre_tree["rock"]
    punk = genre_tree["punk"]

    found = genre_repo.get_by_ids([rock.id, punk.id, 9999])
    assert set(found) == {rock.id, punk.id}
    assert genre_repo.get_by_ids([]) == {}

def test_get_all_in_id_order(genre_repo, genre_tree):
    ids = [genre.id for genre in genre_repo.get_all()]
    assert len(ids) == 7
    assert ids == sorted(ids)

def test_get_roots(genre_repo, genre_tree):
    """Test that only genres without parents are roots."""
    names = [genre.name for genre in genre_repo.get_roots()]
    assert names == ["Rock", "Electronic", "Disco"]

def test_get_children(genre_repo, genre_tree):
    names = [genre.name for genre in genre_repo.get_children(genre_tree["rock"].id)]
    assert names == ["Hard Rock", "Punk"]
    assert genre_repo.get_children(genre_tree["punk"].id) == []

def test_get_derivations(genre_repo, genre_tree):
    derivations = genre_repo.get_derivations(genre_tree["disco"].id)
    assert [genre.name for genre in derivations] == ["House"]
    assert genre_repo.get_derivations(genre_tree["electronic"].id) == []

def test_get_parent_links(genre_repo, genre_tree):
    """Test the lightweight id/name/parents listing."""
    links = {link.id: link for link in genre_repo.get_parent_links()}

    assert len(links) == 7
    assert isinstance(links[genre_tree["rock"].id], BasicGenre)
    assert links[genre_tree["rock"].id].parents == []
    assert links[genre_tree["heavy_metal"].id].parents == [genre_tree["hard_rock"].id]
    assert links[genre_tree["house"].id].name == "House"

def test_add_assigns_id(genre_repo):
    genre = genre_repo.add(Genre(name="Vaporwave"))
    assert genre.id is not None

def test_delete(genre_repo, db_session, genre_tree):
    """Test that deleting a genre removes its edges."""
    house = genre_tree["house"]
    genre_repo.delete(house)
    db_session.commit()

    assert genre_repo.get_by_id(house.id) is None
    assert genre_repo.get_derivations(genre_tree["disco"].id) == []
    assert genre_repo.get_children(genre_tree["electronic"].id) == []

def test_history(genre_repo, db_session, sample_genre):
    genre_repo.add_history(GenreHistory.from_genre(sample_genre, GenreOperation.CREATE))
    sample_genre.name = "Renamed"
    genre_repo.add_history(GenreHistory.from_genre(sample_genre, GenreOperation.UPDATE))
    db_session.commit()

    history = genre_repo.get_history(sample_genre.id)
    assert [entry.operation for entry in history] == ["CREATE", "UPDATE"]
    assert history[1].name == "Renamed"

def test_upsert_vote(genre_repo, db_session, sample_genre):
    """Test that a second vote from the same account replaces the first."""
    genre_repo.upsert_vote(sample_genre.id, 1, 3)
    genre_repo.upsert_vote(sample_genre.id, 1, 5)
    genre_repo.upsert_vote(sample_genre.id, 2, 2)
    db_session.commit()

    votes = {vote.account_id: vote.relevance for vote in genre_repo.get_votes(sample_genre.id)}
    assert votes == {1: 5, 2: 2}

def test_delete_vote(genre_repo, db_session, sample_genre):
    genre_repo.upsert_vote(sample_genre.id, 1, 3)
    db_session.commit()

    assert genre_repo.delete_vote(sample_genre.id, 1) is True
    assert genre_repo.delete_vote(sample_genre.id, 1) is False
    assert genre_repo.get_votes(sample_genre.id) == []
