# api/routes/genres.py

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from atlas.graph import GenreGraph
from atlas.graph.errors import (
    DuplicateAkaError, GenreCycleError, GenreNotFoundError, InvalidGenreRelevanceError
)
from atlas.graph.types import AKA_TIERS
from atlas.sa.database import get_db
from atlas.sa.models import Genre
from atlas.sa.store import SqlGenreStore
from atlas.services.genre_service import GenreService
from api.schemas.genre import (
    TreeGenreSchema, GenreMatchSchema, GenreDetail, GenreCreate, GenreUpdate,
    PathValidationRequest, PathValidationResponse, GenrePath, RelevanceVote,
    RelevanceVoteResult, GenreHistorySchema
)

router = APIRouter(prefix="/genres", tags=["genres"])

def get_graph(db: Session = Depends(get_db)) -> GenreGraph:
    return GenreGraph(SqlGenreStore(db))

def genre_detail(genre: Genre) -> GenreDetail:
    """Build the detail response, grouping akas by tier"""
    tiers = {relevance: tier for tier, relevance in AKA_TIERS.items()}
    akas: Dict[str, List[str]] = {tier: [] for tier in AKA_TIERS}
    for aka in genre.akas:
        akas[tiers[aka.relevance]].append(aka.name)

    return GenreDetail(
        id=genre.id,
        name=genre.name,
        subtitle=genre.subtitle,
        type=genre.type,
        relevance=genre.relevance,
        nsfw=genre.nsfw,
        short_description=genre.short_description,
        long_description=genre.long_description,
        notes=genre.notes,
        parent_ids=genre.parent_ids,
        child_ids=genre.child_ids,
        derived_from_ids=genre.derived_from_ids,
        influenced_by_ids=genre.influenced_by_ids,
        akas=akas,
        created_at=genre.created_at,
        updated_at=genre.updated_at,
    )

def _genre_data(payload: GenreCreate | GenreUpdate) -> Dict[str, Any]:
    data = payload.model_dump(exclude_unset=isinstance(payload, GenreUpdate))
    if data.get('type') is not None:
        data['type'] = data['type'].value
    return data

@router.get("", response_model=List[TreeGenreSchema])
def get_genres(graph: GenreGraph = Depends(get_graph)):
    """List every genre with its parent and derivation edges."""
    return graph.get_all_genres()

@router.get("/search", response_model=List[GenreMatchSchema])
def search_genres(
    query: str = Query(..., description="Free text matched against genre names and akas"),
    graph: GenreGraph = Depends(get_graph)
):
    """
    Fuzzy search genres by name and aka.

    Returns:
        Matches ordered by weight (highest first), then by name
    """
    return graph.search_matches(query)

@router.get("/roots", response_model=List[TreeGenreSchema])
def get_root_genres(graph: GenreGraph = Depends(get_graph)):
    return graph.get_root_genres()

@router.post("/path/validate", response_model=PathValidationResponse)
def validate_path(request: PathValidationRequest, graph: GenreGraph = Depends(get_graph)):
    """
    Check a breadcrumb path such as [1, 4, "derived", 9].

    Malformed paths are reported as invalid rather than rejected.
    """
    return PathValidationResponse(valid=graph.is_path_valid(request.path))

@router.get("/{genre_id}", response_model=GenreDetail)
def get_genre(genre_id: int, db: Session = Depends(get_db)):
    genre = GenreService(db).get_genre(genre_id)
    if genre is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    return genre_detail(genre)

@router.get("/{genre_id}/children", response_model=List[TreeGenreSchema])
def get_children(genre_id: int, graph: GenreGraph = Depends(get_graph)):
    return graph.get_children(genre_id)

@router.get("/{genre_id}/derivations", response_model=List[TreeGenreSchema])
def get_derivations(genre_id: int, graph: GenreGraph = Depends(get_graph)):
    return graph.get_derivations(genre_id)

@router.get("/{genre_id}/path", response_model=GenrePath)
def get_path(genre_id: int, graph: GenreGraph = Depends(get_graph)):
    """Shortest path from a root genre down to this genre."""
    try:
        path = graph.require_path_to_genre(genre_id)
    except GenreNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    return GenrePath(id=genre_id, path=path)

@router.post("", response_model=GenreDetail, status_code=status.HTTP_201_CREATED)
def create_genre(
    payload: GenreCreate,
    account_id: Optional[int] = Query(None, description="Account making the change"),
    db: Session = Depends(get_db)
):
    service = GenreService(db)
    try:
        genre = service.create_genre(_genre_data(payload), account_id)
    except (ValueError, DuplicateAkaError, GenreCycleError, GenreNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return genre_detail(genre)

@router.put("/{genre_id}", response_model=GenreDetail)
def update_genre(
    genre_id: int,
    payload: GenreUpdate,
    account_id: Optional[int] = Query(None, description="Account making the change"),
    db: Session = Depends(get_db)
):
    try:
        genre = GenreService(db).update_genre(genre_id, _genre_data(payload), account_id)
    except GenreNotFoundError as e:
        if e.genre_id == genre_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (ValueError, DuplicateAkaError, GenreCycleError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return genre_detail(genre)

@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_genre(
    genre_id: int,
    account_id: Optional[int] = Query(None, description="Account making the change"),
    db: Session = Depends(get_db)
):
    try:
        GenreService(db).delete_genre(genre_id, account_id)
    except GenreNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    return

@router.post("/{genre_id}/relevance", response_model=RelevanceVoteResult)
def vote_relevance(genre_id: int, vote: RelevanceVote, db: Session = Depends(get_db)):
    try:
        relevance = GenreService(db).vote_relevance(genre_id, vote.relevance, vote.account_id)
    except GenreNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    except InvalidGenreRelevanceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return RelevanceVoteResult(id=genre_id, relevance=relevance)

@router.get("/{genre_id}/history", response_model=List[GenreHistorySchema])
def get_genre_history(genre_id: int, db: Session = Depends(get_db)):
    return GenreService(db).get_history(genre_id)
