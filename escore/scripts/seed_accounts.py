# escore/scripts/seed_accounts.py

from escore.config import COLLECTIONS, get_settings
from escore.repositories.store import make_store
from escore.services.seed import ensure_superadmin_and_admin


def seed_accounts() -> None:
    """
    Legt Superadmin und Admin einmalig an, ohne den Server zu starten.
    Zugangsdaten kommen aus SUPERADMIN_* / ADMIN_*.
    """
    settings = get_settings()
    store = make_store(settings)
    try:
        for collection in COLLECTIONS:
            store.ensure(collection)
        changed = ensure_superadmin_and_admin(store, settings)
        print("Seed-Konten angelegt." if changed else "Seed-Konten waren bereits vorhanden.")
    finally:
        store.close()


if __name__ == "__main__":
    seed_accounts()
