# escore/services/auth.py
# (Passwort-Hashes, Sessions und Rollenprüfung)

from __future__ import annotations

import logging
import secrets
from datetime import timedelta

import bcrypt

from escore.config import Settings
from escore.core.records import now_iso, parse_iso, to_iso, utc_now
from escore.errors import Forbidden, ValidationFailed
from escore.repositories.store import RecordStore, Transaction

logger = logging.getLogger(__name__)

STAFF_ROLES = frozenset({"admin", "superadmin"})
SUPERADMIN_ONLY = frozenset({"superadmin"})

# bcrypt verarbeitet höchstens 72 Bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str | None, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
    except ValueError:
        # kein gültiger bcrypt-Hash gespeichert
        return False


def public_user(user: dict) -> dict:
    return {k: v for k, v in user.items() if k != "passwordHash"}


# --- Sessions ---

def issue_session(tx: Transaction, user: dict, ttl_hours: int) -> str:
    """Legt eine neue Session an (tx muss 'sessions' enthalten)."""
    token = secrets.token_urlsafe(32)
    now = utc_now()
    sessions = tx.read("sessions")
    sessions.append({
        "token": token,
        "userId": user["id"],
        "role": user.get("role"),
        "createdAt": to_iso(now),
        "expiresAt": to_iso(now + timedelta(hours=ttl_hours)),
    })
    tx.write("sessions", sessions)
    return token


def _is_live(session: dict) -> bool:
    return parse_iso(session["expiresAt"]) > utc_now()


def session_user(store: RecordStore, token: str | None) -> dict | None:
    """Nutzer zum Token, falls die Session existiert und nicht abgelaufen ist."""
    if not token:
        return None
    session = next((s for s in store.read("sessions") if s.get("token") == token), None)
    if session is None or not _is_live(session):
        return None
    return next((u for u in store.read("users") if u.get("id") == session["userId"]), None)


def revoke_session(store: RecordStore, token: str | None) -> bool:
    if not token:
        return False
    with store.transaction("sessions") as tx:
        sessions = tx.read("sessions")
        kept = [s for s in sessions if s.get("token") != token]
        if len(kept) == len(sessions):
            return False
        tx.write("sessions", kept)
    return True


def purge_expired_sessions(store: RecordStore) -> int:
    with store.transaction("sessions") as tx:
        sessions = tx.read("sessions")
        live = [s for s in sessions if _is_live(s)]
        removed = len(sessions) - len(live)
        if removed:
            tx.write("sessions", live)
    if removed:
        logger.info("[AUTH] %d abgelaufene Sessions entfernt (%s).", removed, now_iso())
    return removed


# --- Autorisierung ---

def authorize(
    store: RecordStore,
    settings: Settings,
    *,
    bearer: str | None = None,
    secret: str | None = None,
    roles: frozenset[str] = STAFF_ROLES,
    message: str = "Not allowed",
) -> dict:
    """
    Liefert den berechtigten Nutzer oder wirft Forbidden.

    bearer: Session-Token aus dem Authorization-Header.
    secret: 'superadminToken' aus Body/Query; gilt als Session-Token oder
            als Superadmin-Passwort (gegen den gespeicherten Hash geprüft).
    """
    for token in (bearer, secret):
        user = session_user(store, token)
        if user is not None and user.get("role") in roles:
            return user

    if secret and "superadmin" in roles:
        superadmin = next(
            (u for u in store.read("users") if u.get("email") == settings.superadmin_email),
            None,
        )
        if superadmin is not None and verify_password(secret, superadmin.get("passwordHash")):
            return superadmin

    raise Forbidden(message)
