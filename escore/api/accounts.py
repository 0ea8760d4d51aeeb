# ============================
# 📁 escore/api/accounts.py
# (Admins, Registrierung/Login, Nutzerprofil)

from fastapi import APIRouter, Depends

from escore.api.deps import get_app_settings, get_bearer_token, get_store
from escore.config import Settings
from escore.repositories import admins as admins_repo
from escore.repositories import users as users_repo
from escore.repositories.store import RecordStore
from escore.schemas import AdminIn, LoginIn, RegisterIn
from escore.services.auth import SUPERADMIN_ONLY, authorize, revoke_session

router = APIRouter(prefix="/api", tags=["accounts"])


# -----------------------------
# Admins (nur der Superadmin darf anlegen/löschen)
# -----------------------------
@router.get("/admins")
def list_admins(
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    return admins_repo.list_admins(store, settings)


@router.post("/admins", status_code=201)
def create_admin(
    payload: AdminIn,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    token: str | None = Depends(get_bearer_token),
):
    admins_repo.validate_admin(payload, settings)
    authorize(store, settings, bearer=token, secret=payload.superadmin_token,
              roles=SUPERADMIN_ONLY, message="Only the superadmin can add admins or journalists")
    return admins_repo.create_admin(store, settings, payload)


@router.delete("/admins/{admin_id}")
def delete_admin(
    admin_id: str,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    token: str | None = Depends(get_bearer_token),
):
    authorize(store, settings, bearer=token, roles=SUPERADMIN_ONLY,
              message="Only the superadmin can remove admins")
    admins_repo.delete_admin(store, settings, admin_id)
    return {"success": True}


# -----------------------------
# Auth
# -----------------------------
@router.post("/auth/register", status_code=201)
def register(
    payload: RegisterIn,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    user = users_repo.register_user(store, settings, payload)
    return {"message": "Registered", "user": user}


@router.post("/auth/login")
def login(
    payload: LoginIn,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    token, user = users_repo.login(store, settings, payload)
    return {"token": token, "user": user}


@router.post("/auth/logout")
def logout(
    store: RecordStore = Depends(get_store),
    token: str | None = Depends(get_bearer_token),
):
    revoke_session(store, token)
    return {"success": True}


@router.get("/user/{user_id}")
def get_user(user_id: str, store: RecordStore = Depends(get_store)):
    return users_repo.get_user(store, user_id)
