# escore/services/seed.py

from __future__ import annotations

import logging

from pydantic import SecretStr

from escore.config import Settings
from escore.repositories.store import RecordStore
from escore.services.auth import hash_password

logger = logging.getLogger(__name__)


def superadmin_record(settings: Settings) -> dict:
    """Admin-Eintrag des Superadmins (ohne Passwort)."""
    return {
        "id": settings.superadmin_id,
        "name": settings.superadmin_name,
        "email": settings.superadmin_email,
        "role": "superadmin",
    }


def admin_record(settings: Settings) -> dict:
    return {
        "id": settings.admin_id,
        "name": settings.admin_name,
        "email": settings.admin_email,
        "role": "admin",
    }


def _password_hash(secret: SecretStr | None, label: str) -> str | None:
    if secret is None:
        logger.warning("[SEED] Kein Passwort für %s konfiguriert – Login nicht möglich.", label)
        return None
    return hash_password(secret.get_secret_value())


def ensure_superadmin_and_admin(store: RecordStore, settings: Settings) -> bool:
    """
    Stellt sicher, dass Superadmin und Admin in users und admins existieren.
    Abgleich per E-Mail; bestehende Einträge werden nie überschrieben.
    Gibt True zurück, wenn etwas angelegt wurde.
    """
    superadmin = superadmin_record(settings)
    admin = admin_record(settings)

    with store.transaction("users", "admins") as tx:
        users = tx.read("users")
        users_changed = False
        if not any(u.get("email") == superadmin["email"] for u in users):
            users.insert(0, {
                **superadmin,
                "passwordHash": _password_hash(settings.superadmin_password, "superadmin"),
            })
            users_changed = True
        if not any(u.get("email") == admin["email"] for u in users):
            users.insert(0, {
                **admin,
                "passwordHash": _password_hash(settings.admin_password, "admin"),
            })
            users_changed = True
        if users_changed:
            tx.write("users", users)

        admins = tx.read("admins")
        admins_changed = False
        if not any(a.get("email") == superadmin["email"] for a in admins):
            admins.insert(0, superadmin)
            admins_changed = True
        if not any(a.get("email") == admin["email"] for a in admins):
            admins.append(admin)
            admins_changed = True
        if admins_changed:
            tx.write("admins", admins)

    if users_changed or admins_changed:
        logger.info("[SEED] Superadmin/Admin angelegt (users=%s, admins=%s).", users_changed, admins_changed)
    return users_changed or admins_changed
