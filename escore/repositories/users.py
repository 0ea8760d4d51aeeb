import logging

from escore.config import Settings
from escore.core.records import new_id
from escore.errors import AuthenticationFailed, NotFound, ValidationFailed
from escore.repositories.store import RecordStore
from escore.schemas import LoginIn, RegisterIn
from escore.services.auth import hash_password, issue_session, public_user, verify_password

logger = logging.getLogger(__name__)

COLLECTION = "users"


def register_user(store: RecordStore, settings: Settings, payload: RegisterIn) -> dict:
    """Registrierung ist nur mit der Rolle 'user' möglich."""
    if not payload.name or not payload.email or not payload.password:
        raise ValidationFailed("Name, email and password are required")
    if payload.email in (settings.superadmin_email, settings.admin_email):
        raise ValidationFailed("This email is already taken")

    password_hash = hash_password(payload.password)
    with store.transaction(COLLECTION) as tx:
        users = tx.read(COLLECTION)
        if any(u.get("email") == payload.email for u in users):
            raise ValidationFailed("This email is already taken")
        user = {
            "id": new_id(),
            "name": payload.name,
            "email": payload.email,
            "passwordHash": password_hash,
            "role": "user",
        }
        users.append(user)
        tx.write(COLLECTION, users)
    return public_user(user)


def login(store: RecordStore, settings: Settings, payload: LoginIn) -> tuple[str, dict]:
    with store.transaction(COLLECTION, "sessions") as tx:
        user = next(
            (u for u in tx.read(COLLECTION) if payload.email and u.get("email") == payload.email),
            None,
        )
        if user is None or not verify_password(payload.password, user.get("passwordHash")):
            raise AuthenticationFailed("Wrong email or password")
        token = issue_session(tx, user, settings.session_ttl_hours)
    logger.info("[AUTH] Login für Nutzer %s", user["id"])
    return token, public_user(user)


def get_user(store: RecordStore, user_id: str) -> dict:
    user = next((u for u in store.read(COLLECTION) if u.get("id") == user_id), None)
    if user is None:
        raise NotFound("User not found")
    return public_user(user)
