from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from escore.config import Settings
from escore.repositories.store import RecordStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Session-Token aus 'Authorization: Bearer …' (oder None)."""
    if credentials is None:
        return None
    return credentials.credentials
