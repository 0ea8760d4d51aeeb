from fastapi import APIRouter, Depends

from escore.api.deps import get_store
from escore.repositories import matches as matches_repo
from escore.repositories.store import RecordStore
from escore.schemas import MatchIn

router = APIRouter(prefix="/api", tags=["matches"])


@router.get("/matches")
def list_matches(store: RecordStore = Depends(get_store)):
    return matches_repo.list_matches(store)


@router.get("/featured-match")
def list_featured_matches(store: RecordStore = Depends(get_store)):
    return matches_repo.list_matches(store)


@router.post("/featured-match", status_code=201)
def create_featured_match(payload: MatchIn, store: RecordStore = Depends(get_store)):
    return matches_repo.create_match(store, payload)


@router.put("/featured-match/{match_id}")
def update_featured_match(match_id: str, payload: MatchIn, store: RecordStore = Depends(get_store)):
    matches_repo.update_match(store, match_id, payload)
    return {"success": True}


@router.delete("/featured-match/{match_id}")
def delete_featured_match(match_id: str, store: RecordStore = Depends(get_store)):
    matches_repo.delete_match(store, match_id)
    return {"success": True}
