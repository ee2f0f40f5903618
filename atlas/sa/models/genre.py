# atlas/sa/models/genre.py
from typing import List
from sqlalchemy import Column, ForeignKey, Index, Integer, String, Boolean, Table, Text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

from atlas.graph.types import GenreType, UNSET_GENRE_RELEVANCE

# Tree edges: child_id lists parent_id among its parents
genre_parent = Table(
    'genre_parent',
    Base.metadata,
    Column('parent_id', Integer, ForeignKey('genre.id'), primary_key=True),
    Column('child_id', Integer, ForeignKey('genre.id'), primary_key=True),
)

# Derivation edges: derivation_id is derived from derived_from_id
genre_derived_from = Table(
    'genre_derived_from',
    Base.metadata,
    Column('derived_from_id', Integer, ForeignKey('genre.id'), primary_key=True),
    Column('derivation_id', Integer, ForeignKey('genre.id'), primary_key=True),
)

# Influence edges: influenced_id is influenced by influencer_id
genre_influence = Table(
    'genre_influence',
    Base.metadata,
    Column('influencer_id', Integer, ForeignKey('genre.id'), primary_key=True),
    Column('influenced_id', Integer, ForeignKey('genre.id'), primary_key=True),
)

class Genre(Base, TimestampMixin):
    __tablename__ = 'genre'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=GenreType.STYLE.value)
    relevance: Mapped[int] = mapped_column(Integer, nullable=False, default=UNSET_GENRE_RELEVANCE)
    nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    parents: Mapped[List['Genre']] = relationship(
        'Genre',
        secondary=genre_parent,
        primaryjoin=lambda: Genre.id == genre_parent.c.child_id,
        secondaryjoin=lambda: Genre.id == genre_parent.c.parent_id,
        back_populates='children',
        order_by=lambda: Genre.id,
    )
    children: Mapped[List['Genre']] = relationship(
        'Genre',
        secondary=genre_parent,
        primaryjoin=lambda: Genre.id == genre_parent.c.parent_id,
        secondaryjoin=lambda: Genre.id == genre_parent.c.child_id,
        back_populates='parents',
        order_by=lambda: Genre.id,
    )
    derived_from: Mapped[List['Genre']] = relationship(
        'Genre',
        secondary=genre_derived_from,
        primaryjoin=lambda: Genre.id == genre_derived_from.c.derivation_id,
        secondaryjoin=lambda: Genre.id == genre_derived_from.c.derived_from_id,
        back_populates='derivations',
        order_by=lambda: Genre.id,
    )
    derivations: Mapped[List['Genre']] = relationship(
        'Genre',
        secondary=genre_derived_from,
        primaryjoin=lambda: Genre.id == genre_derived_from.c.derived_from_id,
        secondaryjoin=lambda: Genre.id == genre_derived_from.c.derivation_id,
        back_populates='derived_from',
        order_by=lambda: Genre.id,
    )
    influenced_by: Mapped[List['Genre']] = relationship(
        'Genre',
        secondary=genre_influence,
        primaryjoin=lambda: Genre.id == genre_influence.c.influenced_id,
        secondaryjoin=lambda: Genre.id == genre_influence.c.influencer_id,
        back_populates='influences',
        order_by=lambda: Genre.id,
    )
    influences: Mapped[List['Genre']] = relationship(
        'Genre',
        secondary=genre_influence,
        primaryjoin=lambda: Genre.id == genre_influence.c.influencer_id,
        secondaryjoin=lambda: Genre.id == genre_influence.c.influenced_id,
        back_populates='influenced_by',
        order_by=lambda: Genre.id,
    )
    akas: Mapped[List['GenreAka']] = relationship(
        'GenreAka',
        back_populates='genre',
        cascade='all, delete-orphan',
        order_by=lambda: [GenreAka.relevance.desc(), GenreAka.order],
    )
    relevance_votes: Mapped[List['GenreRelevanceVote']] = relationship(
        'GenreRelevanceVote',
        back_populates='genre',
        cascade='all, delete-orphan',
    )

    __table_args__ = (
        # Search index
        Index('idx_genre_name', 'name'),
    )

    @property
    def parent_ids(self) -> List[int]:
        return [parent.id for parent in self.parents]

    @property
    def child_ids(self) -> List[int]:
        return [child.id for child in self.children]

    @property
    def derived_from_ids(self) -> List[int]:
        return [genre.id for genre in self.derived_from]

    @property
    def influenced_by_ids(self) -> List[int]:
        return [genre.id for genre in self.influenced_by]

    @property
    def aka_names(self) -> List[str]:
        return [aka.name for aka in self.akas]

    def __repr__(self) -> str:
        return f"<Genre {self.id} {self.name!r}>"

class GenreAka(Base):
    __tablename__ = 'genre_aka'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    genre_id: Mapped[int] = mapped_column(ForeignKey('genre.id'), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 3 = primary, 2 = secondary, 1 = tertiary
    relevance: Mapped[int] = mapped_column(Integer, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    genre = relationship('Genre', back_populates='akas')

class GenreRelevanceVote(Base, TimestampMixin):
    __tablename__ = 'genre_relevance_vote'

    genre_id: Mapped[int] = mapped_column(ForeignKey('genre.id'), primary_key=True)
    account_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    relevance: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    genre = relationship('Genre', back_populates='relevance_votes')
