from fastapi import APIRouter, Depends, Query

from escore.api.deps import get_app_settings, get_bearer_token, get_store
from escore.config import Settings
from escore.repositories import polls as polls_repo
from escore.repositories.store import RecordStore
from escore.schemas import PollIn, VoteIn
from escore.services.auth import STAFF_ROLES, authorize

router = APIRouter(prefix="/api/polls", tags=["polls"])


@router.get("")
def list_polls(store: RecordStore = Depends(get_store)):
    return polls_repo.list_polls(store)


@router.post("", status_code=201)
def create_poll(
    payload: PollIn,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    token: str | None = Depends(get_bearer_token),
):
    # erst 400, dann 403
    polls_repo.validate_poll(payload)
    authorize(store, settings, bearer=token, roles=STAFF_ROLES,
              message="Only an admin or superadmin can create polls")
    return polls_repo.create_poll(store, payload)


@router.post("/vote")
def vote(payload: VoteIn, store: RecordStore = Depends(get_store)):
    polls_repo.vote(store, payload)
    return {"success": True}


@router.delete("/{poll_id}")
def delete_poll(
    poll_id: str,
    superadmin_token: str | None = Query(None, alias="superadminToken"),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    token: str | None = Depends(get_bearer_token),
):
    authorize(store, settings, bearer=token, secret=superadmin_token, roles=STAFF_ROLES,
              message="Only an admin or superadmin can delete polls")
    polls_repo.delete_poll(store, poll_id)
    return {"success": True}
