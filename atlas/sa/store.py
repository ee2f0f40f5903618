# atlas/sa/store.py
import logging
from functools import wraps
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from atlas.graph.errors import GenreNotFoundError, StoreUnavailableError
from atlas.graph.types import AKA_TIERS, GenreType, TreeGenre
from atlas.sa.models import Genre, GenreAka
from atlas.sa.repositories.genre import GenreRepository

logger = logging.getLogger(__name__)

def to_tree_genre(genre: Genre) -> TreeGenre:
    """Convert an ORM genre into the graph engine's node type"""
    return TreeGenre(
        id=genre.id,
        name=genre.name,
        parents=genre.parent_ids,
        derived_from=genre.derived_from_ids,
        subtitle=genre.subtitle,
        type=GenreType(genre.type),
        relevance=genre.relevance,
        nsfw=genre.nsfw,
        akas=genre.aka_names,
        updated_at=genre.updated_at,
    )

def store_call(func):
    """Turn database errors into StoreUnavailableError"""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Genre store error in {func.__name__}: {str(e)}")
            raise StoreUnavailableError(f"Genre store unavailable: {str(e)}") from e
    return wrapper

class SqlGenreStore:
    """GenreStore backed by the relational database"""

    def __init__(self, session: Session):
        self.session = session
        self.repo = GenreRepository(session)

    @store_call
    def list_all_genres(self) -> List[TreeGenre]:
        return [to_tree_genre(genre) for genre in self.repo.get_all()]

    @store_call
    def list_root_genres(self) -> List[TreeGenre]:
        return [to_tree_genre(genre) for genre in self.repo.get_roots()]

    @store_call
    def list_children(self, parent_id: int) -> List[TreeGenre]:
        return [to_tree_genre(genre) for genre in self.repo.get_children(parent_id)]

    @store_call
    def list_derivations(self, source_id: int) -> List[TreeGenre]:
        return [to_tree_genre(genre) for genre in self.repo.get_derivations(source_id)]

    @store_call
    def get_genre(self, genre_id: int) -> Optional[TreeGenre]:
        genre = self.repo.get_by_id(genre_id)
        return to_tree_genre(genre) if genre else None

    @store_call
    def put_genre(self, tree_genre: TreeGenre) -> None:
        """Upsert a genre by ID, replacing its edges and akas.

        Referenced parents and derived-from genres must already exist. Akas
        are stored as primary.
        """
        referenced = self.repo.get_by_ids([*tree_genre.parents, *tree_genre.derived_from])
        missing = [i for i in [*tree_genre.parents, *tree_genre.derived_from] if i not in referenced]
        if missing:
            raise GenreNotFoundError(missing[0])

        genre = self.repo.get_by_id(tree_genre.id)
        if genre is None:
            genre = Genre(id=tree_genre.id)
            self.session.add(genre)

        genre.name = tree_genre.name
        genre.subtitle = tree_genre.subtitle
        genre.type = GenreType(tree_genre.type).value
        genre.relevance = tree_genre.relevance
        genre.nsfw = tree_genre.nsfw
        genre.parents = [referenced[i] for i in tree_genre.parents]
        genre.derived_from = [referenced[i] for i in tree_genre.derived_from]
        genre.akas = [
            GenreAka(name=aka, relevance=AKA_TIERS["primary"], order=order)
            for order, aka in enumerate(tree_genre.akas)
        ]
        self.session.commit()
