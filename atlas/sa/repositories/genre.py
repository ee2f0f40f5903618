# atlas/sa/repositories/genre.py

from collections import defaultdict
from typing import Dict, Iterable, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from atlas.graph.cycles import BasicGenre
from atlas.sa.models import (
    Genre, GenreHistory, GenreRelevanceVote,
    genre_parent, genre_derived_from
)

class GenreRepository:
    """Repository for managing Genre entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, genre_id: int) -> Optional[Genre]:
        """Get a genre by its ID.

        Args:
            genre_id: The ID of the genre to retrieve

        Returns:
            The Genre object if found, None otherwise
        """
        return self.session.get(Genre, genre_id)

    def get_by_name(self, name: str) -> Optional[Genre]:
        """Get the first genre with the given name."""
        return self.session.query(Genre).filter(Genre.name == name).order_by(Genre.id).first()

    def get_by_ids(self, genre_ids: Iterable[int]) -> Dict[int, Genre]:
        """Get genres keyed by ID. Unknown IDs are simply missing from the result."""
        ids = set(genre_ids)
        if not ids:
            return {}
        genres = self.session.query(Genre).filter(Genre.id.in_(ids)).all()
        return {genre.id: genre for genre in genres}

    def get_all(self) -> List[Genre]:
        """Get every genre in insertion (ID) order."""
        return self.session.query(Genre).order_by(Genre.id).all()

    def get_roots(self) -> List[Genre]:
        """Get genres without parents."""
        return (self.session.query(Genre)
                .filter(Genre.id.notin_(select(genre_parent.c.child_id)))
                .order_by(Genre.id)
                .all())

    def get_children(self, parent_id: int) -> List[Genre]:
        """Get genres that list parent_id as a parent."""
        return (self.session.query(Genre)
                .join(genre_parent, genre_parent.c.child_id == Genre.id)
                .filter(genre_parent.c.parent_id == parent_id)
                .order_by(Genre.id)
                .all())

    def get_derivations(self, source_id: int) -> List[Genre]:
        """Get genres derived from source_id."""
        return (self.session.query(Genre)
                .join(genre_derived_from, genre_derived_from.c.derivation_id == Genre.id)
                .filter(genre_derived_from.c.derived_from_id == source_id)
                .order_by(Genre.id)
                .all())

    def get_parent_links(self) -> List[BasicGenre]:
        """Get every genre's id, name and parent IDs without loading full rows.

        This is the baseline graph for cycle detection.
        """
        parents: Dict[int, List[int]] = defaultdict(list)
        rows = self.session.execute(
            select(genre_parent.c.child_id, genre_parent.c.parent_id)
            .order_by(genre_parent.c.child_id, genre_parent.c.parent_id)
        )
        for child_id, parent_id in rows:
            parents[child_id].append(parent_id)

        return [
            BasicGenre(id=genre_id, name=name, parents=parents[genre_id])
            for genre_id, name in self.session.query(Genre.id, Genre.name).order_by(Genre.id)
        ]

    def add(self, genre: Genre) -> Genre:
        """Add a genre to the session and flush so it gets an ID."""
        self.session.add(genre)
        self.session.flush()
        return genre

    def delete(self, genre: Genre) -> None:
        self.session.delete(genre)
        self.session.flush()

    # History

    def add_history(self, history: GenreHistory) -> GenreHistory:
        self.session.add(history)
        return history

    def get_history(self, genre_id: int) -> List[GenreHistory]:
        """Get history entries for a genre, oldest first."""
        return (self.session.query(GenreHistory)
                .filter(GenreHistory.genre_id == genre_id)
                .order_by(GenreHistory.id)
                .all())

    # Relevance votes

    def get_votes(self, genre_id: int) -> List[GenreRelevanceVote]:
        return (self.session.query(GenreRelevanceVote)
                .filter(GenreRelevanceVote.genre_id == genre_id)
                .all())

    def upsert_vote(self, genre_id: int, account_id: int, relevance: int) -> GenreRelevanceVote:
        vote = self.session.get(GenreRelevanceVote, (genre_id, account_id))
        if vote is None:
            vote = GenreRelevanceVote(genre_id=genre_id, account_id=account_id, relevance=relevance)
            self.session.add(vote)
        else:
            vote.relevance = relevance
        self.session.flush()
        return vote

    def delete_vote(self, genre_id: int, account_id: int) -> bool:
        """Delete an account's vote on a genre.

        Returns:
            True if a vote was deleted, False if there was none
        """
        vote = self.session.get(GenreRelevanceVote, (genre_id, account_id))
        if vote is None:
            return False
        self.session.delete(vote)
        self.session.flush()
        return True
