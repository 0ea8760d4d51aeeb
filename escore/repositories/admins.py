import logging

from escore.config import Settings
from escore.core.records import new_id
from escore.errors import NotFound, ValidationFailed
from escore.repositories.store import RecordStore
from escore.schemas import AdminIn
from escore.services.auth import hash_password
from escore.services.seed import superadmin_record

logger = logging.getLogger(__name__)

COLLECTION = "admins"
STAFF_ROLES = ("admin", "journalist")


def _with_superadmin(admins: list[dict], settings: Settings) -> list[dict]:
    # Superadmin ist immer vorhanden (wird nicht gespeichert, nur ergänzt)
    if any(a.get("email") == settings.superadmin_email for a in admins):
        return admins
    return [superadmin_record(settings), *admins]


def list_admins(store: RecordStore, settings: Settings) -> list[dict]:
    return _with_superadmin(store.read(COLLECTION), settings)


def validate_admin(payload: AdminIn, settings: Settings) -> None:
    """Prüfungen, die vor der Berechtigungsprüfung laufen."""
    if not payload.name or not payload.email:
        raise ValidationFailed("Name and email are required")
    if payload.email == settings.superadmin_email:
        raise ValidationFailed("The superadmin cannot be added")
    if payload.role not in STAFF_ROLES:
        raise ValidationFailed("Only admin or journalist can be added")


def create_admin(store: RecordStore, settings: Settings, payload: AdminIn) -> dict:
    """
    Legt Admin und zugehörigen Login (gleiche id) in einer Transaktion an.
    Passwort: aus dem Request oder STAFF_DEFAULT_PASSWORD; fehlt beides,
    ist kein Login möglich. Erwartet bereits per validate_admin geprüfte Eingaben.
    """
    if payload.password:
        password_hash = hash_password(payload.password)
    elif settings.staff_default_password is not None:
        password_hash = hash_password(settings.staff_default_password.get_secret_value())
    else:
        password_hash = None

    with store.transaction(COLLECTION, "users") as tx:
        admins = tx.read(COLLECTION)
        users = tx.read("users")
        if any(a.get("email") == payload.email for a in admins):
            raise ValidationFailed("This email already exists as an admin")
        if any(u.get("email") == payload.email for u in users):
            raise ValidationFailed("This email is already taken")

        admin = {"id": new_id(), "name": payload.name, "email": payload.email, "role": payload.role}
        admins.append(admin)
        users.append({**admin, "passwordHash": password_hash})
        tx.write(COLLECTION, admins)
        tx.write("users", users)

    logger.info("[ADMIN] %s %s angelegt", admin["role"], admin["id"])
    return admin


def delete_admin(store: RecordStore, settings: Settings, admin_id: str) -> None:
    """
    Entfernt Admin samt Login. Der Superadmin ist nicht löschbar:
    eine Anfrage für ihn ist ein erfolgreicher No-op.
    """
    with store.transaction(COLLECTION, "users") as tx:
        admins = tx.read(COLLECTION)
        target = next((a for a in admins if a.get("id") == admin_id), None)
        if target is None:
            if admin_id == settings.superadmin_id:
                return
            raise NotFound("Admin not found")
        if target.get("email") == settings.superadmin_email:
            return

        kept = _with_superadmin([a for a in admins if a.get("id") != admin_id], settings)
        tx.write(COLLECTION, kept)
        users = tx.read("users")
        tx.write("users", [u for u in users if u.get("id") != admin_id])

    logger.info("[ADMIN] %s entfernt", admin_id)
