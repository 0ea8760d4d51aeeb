from fastapi import APIRouter, Depends, Query

from escore.api.deps import get_app_settings, get_bearer_token, get_store
from escore.config import Settings
from escore.errors import ValidationFailed
from escore.repositories import categories as categories_repo
from escore.repositories.store import RecordStore
from escore.schemas import CategoryIn
from escore.services.auth import SUPERADMIN_ONLY, authorize

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
def list_categories(store: RecordStore = Depends(get_store)):
    return categories_repo.list_categories(store)


@router.post("", status_code=201)
def create_category(
    payload: CategoryIn,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    token: str | None = Depends(get_bearer_token),
):
    if not payload.name:
        raise ValidationFailed("Category name is required")
    authorize(store, settings, bearer=token, secret=payload.superadmin_token,
              roles=SUPERADMIN_ONLY, message="Only the superadmin can add categories")
    return categories_repo.create_category(store, payload.name)


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    superadmin_token: str | None = Query(None, alias="superadminToken"),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    token: str | None = Depends(get_bearer_token),
):
    authorize(store, settings, bearer=token, secret=superadmin_token,
              roles=SUPERADMIN_ONLY, message="Only the superadmin can delete categories")
    categories_repo.delete_category(store, category_id)
    return {"success": True}
