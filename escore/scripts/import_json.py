# escore/scripts/import_json.py

import argparse
from pathlib import Path

import orjson

from escore.config import COLLECTIONS, get_settings
from escore.repositories.store import RecordStore, make_store
from escore.services.auth import hash_password

# Sessions werden nie importiert
IMPORTABLE = tuple(c for c in COLLECTIONS if c != "sessions")


def _upgrade_user(user: dict) -> dict:
    """Klartext-Passwort (Altbestand) -> bcrypt-Hash."""
    user = dict(user)
    password = user.pop("password", None)
    if "passwordHash" not in user:
        user["passwordHash"] = hash_password(password) if password else None
    return user


def import_json_dir(store: RecordStore, source_dir: Path) -> dict[str, int]:
    """
    Übernimmt alte <collection>.json-Dateien in den konfigurierten Store.
    Vorhandene Collections werden komplett ersetzt; fehlende Dateien bleiben unberührt.
    """
    loaded: dict[str, list] = {}
    for collection in IMPORTABLE:
        path = Path(source_dir) / f"{collection}.json"
        if not path.exists():
            continue
        records = orjson.loads(path.read_bytes())
        if collection == "users":
            records = [_upgrade_user(u) for u in records]
        loaded[collection] = records

    if loaded:
        with store.transaction(*loaded) as tx:
            for collection, records in loaded.items():
                tx.write(collection, records)
    return {collection: len(records) for collection, records in loaded.items()}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Import legacy JSON collection files.")
    parser.add_argument("source_dir", type=Path, help="directory containing news.json, users.json, ...")
    args = parser.parse_args(argv)

    store = make_store(get_settings())
    try:
        counts = import_json_dir(store, args.source_dir)
    finally:
        store.close()

    if not counts:
        print(f"Keine Collection-Dateien in {args.source_dir} gefunden.")
    for collection, count in counts.items():
        print(f"{collection}: {count} Datensätze importiert")


if __name__ == "__main__":
    main()
