# api/schemas/genre.py
from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from atlas.graph.types import GenreType, UNSET_GENRE_RELEVANCE

class GenreAkas(BaseModel):
    primary: List[str] = []
    secondary: List[str] = []
    tertiary: List[str] = []

class TreeGenreSchema(BaseModel):
    id: int
    name: str
    subtitle: Optional[str] = None
    type: GenreType
    relevance: int
    nsfw: bool
    parents: List[int] = []
    derived_from: List[int] = []
    akas: List[str] = []
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class GenreMatchSchema(BaseModel):
    id: int
    weight: float
    matched_aka: Optional[str] = None
    genre: TreeGenreSchema

    model_config = ConfigDict(from_attributes=True)

class GenreDetail(BaseModel):
    id: int
    name: str
    subtitle: Optional[str] = None
    type: GenreType
    relevance: int
    nsfw: bool
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    notes: Optional[str] = None
    parent_ids: List[int] = []
    child_ids: List[int] = []
    derived_from_ids: List[int] = []
    influenced_by_ids: List[int] = []
    akas: GenreAkas
    created_at: datetime
    updated_at: datetime

class GenreCreate(BaseModel):
    name: str = Field(..., min_length=1)
    subtitle: Optional[str] = None
    type: GenreType = GenreType.STYLE
    nsfw: bool = False
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    notes: Optional[str] = None
    parents: List[int] = []
    children: Optional[List[int]] = None
    derived_from: List[int] = []
    influenced_by: List[int] = []
    akas: GenreAkas = GenreAkas()

class GenreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    subtitle: Optional[str] = None
    type: Optional[GenreType] = None
    nsfw: Optional[bool] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    notes: Optional[str] = None
    parents: Optional[List[int]] = None
    children: Optional[List[int]] = None
    derived_from: Optional[List[int]] = None
    influenced_by: Optional[List[int]] = None
    akas: Optional[GenreAkas] = None

class PathValidationRequest(BaseModel):
    path: List[Union[StrictInt, str]]

class PathValidationResponse(BaseModel):
    valid: bool

class GenrePath(BaseModel):
    id: int
    path: List[int]

class RelevanceVote(BaseModel):
    relevance: int = Field(..., description=f"0-7, or {UNSET_GENRE_RELEVANCE} to withdraw the vote")
    account_id: int

class RelevanceVoteResult(BaseModel):
    id: int
    relevance: int

class GenreHistorySchema(BaseModel):
    id: int
    genre_id: int
    name: str
    subtitle: Optional[str] = None
    type: str
    nsfw: bool
    parent_ids: List[int] = []
    derived_from_ids: List[int] = []
    influenced_by_ids: List[int] = []
    operation: str
    account_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
