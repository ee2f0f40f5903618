# atlas/services/genre_service.py
import logging
import math
from contextlib import contextmanager
import statistics
from datetime import datetime, UTC
from typing import Any, Dict, Iterable, Iterator, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from atlas.graph.cycles import GenreMutation, ensure_no_cycle
from atlas.graph.errors import (
    DuplicateAkaError, GenreNotFoundError, InvalidGenreRelevanceError, StoreUnavailableError
)
from atlas.graph.types import (
    AKA_TIERS, GenreType, UNSET_GENRE_RELEVANCE, is_valid_relevance
)
from atlas.sa.models import Genre, GenreAka, GenreHistory, GenreOperation
from atlas.sa.repositories.genre import GenreRepository
from atlas.sa.store import store_call

logger = logging.getLogger(__name__)

# Fields copied straight from input data onto the genre
SCALAR_FIELDS = ('name', 'subtitle', 'type', 'nsfw', 'short_description', 'long_description', 'notes')

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None

class GenreService:
    """Creates, updates and deletes genres while keeping the parent graph acyclic.

    Every mutation is checked, persisted and recorded in the genre history in
    a single commit. Any failure rolls the session back before propagating.
    """

    def __init__(self, session: Session):
        """
        Initialize the genre service.

        Args:
            session: SQLAlchemy session
        """
        self.session = session
        self.repo = GenreRepository(session)

    def create_genre(self, data: Dict[str, Any], account_id: Optional[int] = None) -> Genre:
        """
        Create a genre.

        Args:
            data: Genre fields. 'name' is required; 'parents', 'children',
                  'derived_from' and 'influenced_by' are lists of genre IDs;
                  'akas' maps 'primary'/'secondary'/'tertiary' to name lists
            account_id: Account making the change, recorded in history

        Returns:
            The created Genre

        Raises:
            ValueError: If the name is missing or the type is unknown
            DuplicateAkaError: If an aka appears more than once
            GenreNotFoundError: If a referenced genre does not exist
            GenreCycleError: If the new parent/child links would form a cycle
        """
        name = _clean_text(data.get('name'))
        if not name:
            raise ValueError("Genre name is required")

        akas = self._build_akas(data.get('akas'))

        with self._transaction():
            ensure_no_cycle(
                self.repo.get_parent_links(),
                GenreMutation(name=name, parents=data.get('parents'), children=data.get('children'))
            )

            genre = Genre(
                relevance=UNSET_GENRE_RELEVANCE,
                type=GenreType.STYLE.value,
                nsfw=False,
            )
            self._apply_fields(genre, {**data, 'name': name})
            genre.akas = akas
            self._apply_links(genre, data)
            self.repo.add(genre)

            self.repo.add_history(GenreHistory.from_genre(genre, GenreOperation.CREATE, account_id))
            logger.info(f"Created genre {genre.id} '{genre.name}'")

        return genre

    def update_genre(self, genre_id: int, data: Dict[str, Any], account_id: Optional[int] = None) -> Genre:
        """
        Update a genre. Only keys present in data are changed.

        Raises:
            GenreNotFoundError: If the genre or a referenced genre does not exist
            GenreCycleError: If the new parent/child links would form a cycle
        """
        if 'name' in data:
            name = _clean_text(data['name'])
            if not name:
                raise ValueError("Genre name is required")
            data = {**data, 'name': name}

        akas = self._build_akas(data['akas']) if data.get('akas') is not None else None

        with self._transaction():
            genre = self._require_genre(genre_id)

            if data.get('parents') is not None or data.get('children') is not None:
                ensure_no_cycle(
                    self.repo.get_parent_links(),
                    GenreMutation(
                        id=genre.id,
                        name=data.get('name', genre.name),
                        parents=data.get('parents'),
                        children=data.get('children'),
                    )
                )

            before = self._snapshot(genre)
            self._apply_fields(genre, data)
            if akas is not None:
                genre.akas = akas
            self._apply_links(genre, data)
            self.session.flush()

            if self._snapshot(genre) == before:
                logger.info(f"No changes to genre {genre.id} '{genre.name}'")
            else:
                genre.updated_at = datetime.now(UTC)
                self.repo.add_history(GenreHistory.from_genre(genre, GenreOperation.UPDATE, account_id))
                logger.info(f"Updated genre {genre.id} '{genre.name}'")

        return genre

    def delete_genre(self, genre_id: int, account_id: Optional[int] = None) -> List[int]:
        """
        Delete a genre, moving its children up under its own parents.

        Each child loses the deleted genre as a parent and gains every one of
        its parents. Derivation and influence links to the genre are dropped.

        Returns:
            IDs of the re-parented children

        Raises:
            GenreNotFoundError: If the genre does not exist
        """
        with self._transaction():
            genre = self._require_genre(genre_id)
            parents = list(genre.parents)
            children = list(genre.children)
            parent_ids = [parent.id for parent in parents]

            self.repo.add_history(GenreHistory.from_genre(genre, GenreOperation.DELETE, account_id))

            for child in children:
                child.parents.remove(genre)
                for parent in parents:
                    if parent not in child.parents:
                        child.parents.append(parent)
                child.updated_at = datetime.now(UTC)

            self.repo.delete(genre)

            for child in children:
                self.repo.add_history(GenreHistory.from_genre(child, GenreOperation.UPDATE, account_id))
            child_ids = [child.id for child in children]

        logger.info(f"Deleted genre {genre_id}, moved {len(child_ids)} children under {parent_ids}")
        return child_ids

    def vote_relevance(self, genre_id: int, relevance: int, account_id: int) -> int:
        """
        Record an account's relevance vote and recompute the genre's relevance.

        Voting UNSET_GENRE_RELEVANCE withdraws the account's vote. The genre's
        relevance becomes the median of all votes rounded half up, or
        UNSET_GENRE_RELEVANCE when no votes remain.

        Returns:
            The genre's new relevance

        Raises:
            GenreNotFoundError: If the genre does not exist
            InvalidGenreRelevanceError: If relevance is out of range
        """
        if not is_valid_relevance(relevance):
            raise InvalidGenreRelevanceError(relevance)

        with self._transaction():
            genre = self._require_genre(genre_id)
            if relevance == UNSET_GENRE_RELEVANCE:
                self.repo.delete_vote(genre_id, account_id)
            else:
                self.repo.upsert_vote(genre_id, account_id, relevance)

            votes = [vote.relevance for vote in self.repo.get_votes(genre_id)]
            new_relevance = round_half_up(statistics.median(votes)) if votes else UNSET_GENRE_RELEVANCE
            genre.relevance = new_relevance

        logger.info(f"Genre {genre_id} relevance is now {new_relevance} ({len(votes)} votes)")
        return new_relevance

    @store_call
    def get_genre(self, genre_id: int) -> Optional[Genre]:
        return self.repo.get_by_id(genre_id)

    @store_call
    def get_history(self, genre_id: int) -> List[GenreHistory]:
        return self.repo.get_history(genre_id)

    # Helpers

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """Commit on success, roll back and re-raise on failure"""
        try:
            yield self.session
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error during genre change: {str(e)}")
            raise StoreUnavailableError(f"Genre store unavailable: {str(e)}") from e
        except Exception:
            self.session.rollback()
            raise

    def _require_genre(self, genre_id: int) -> Genre:
        genre = self.repo.get_by_id(genre_id)
        if genre is None:
            raise GenreNotFoundError(genre_id)
        return genre

    def _apply_fields(self, genre: Genre, data: Dict[str, Any]) -> None:
        for field in SCALAR_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if field == 'type':
                try:
                    value = GenreType(value).value
                except ValueError:
                    raise ValueError(f"Unknown genre type: {value}")
            elif field == 'nsfw':
                value = bool(value)
            elif field != 'name':
                value = _clean_text(value)
            setattr(genre, field, value)

    def _apply_links(self, genre: Genre, data: Dict[str, Any]) -> None:
        for field in ('parents', 'children', 'derived_from', 'influenced_by'):
            if data.get(field) is not None:
                setattr(genre, field, self._load_genres(data[field]))

    def _load_genres(self, genre_ids: Iterable[int]) -> List[Genre]:
        ids = list(dict.fromkeys(genre_ids))
        found = self.repo.get_by_ids(ids)
        for genre_id in ids:
            if genre_id not in found:
                raise GenreNotFoundError(genre_id)
        return [found[genre_id] for genre_id in ids]

    def _build_akas(self, akas: Optional[Dict[str, List[str]]]) -> List[GenreAka]:
        """Trim and validate akas, rejecting any name that appears twice."""
        result: List[GenreAka] = []
        seen = set()
        for tier, relevance in AKA_TIERS.items():
            names = [name.strip() for name in (akas or {}).get(tier, []) if name and name.strip()]
            for order, name in enumerate(names):
                if name in seen:
                    raise DuplicateAkaError(name, tier)
                seen.add(name)
                result.append(GenreAka(name=name, relevance=relevance, order=order))
        return result

    def _snapshot(self, genre: Genre) -> Dict[str, Any]:
        return {
            **{field: getattr(genre, field) for field in SCALAR_FIELDS},
            'parents': sorted(genre.parent_ids),
            'children': sorted(genre.child_ids),
            'derived_from': sorted(genre.derived_from_ids),
            'influenced_by': sorted(genre.influenced_by_ids),
            'akas': [(aka.name, aka.relevance, aka.order) for aka in genre.akas],
        }
