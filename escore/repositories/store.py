# ============================
# 📁 escore/repositories/store.py
# (Record Store: read/write ganzer Collections, SQLite oder JSON-Dateien)

from __future__ import annotations

import copy
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import orjson
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from escore.config import Settings
from escore.core.records import utc_now
from escore.database import Base, make_engine, make_session_factory
from escore.models_sql import CollectionORM

logger = logging.getLogger(__name__)

Record = dict
Records = list[Record]


class Transaction:
    """
    Arbeitseinheit über eine feste Menge Collections.

    Schreibzugriffe werden gesammelt und erst beim Verlassen von
    RecordStore.transaction() gemeinsam gespeichert.
    """

    def __init__(self, store: "RecordStore", collections: tuple[str, ...]):
        self._store = store
        self._collections = collections
        self.pending: dict[str, Records] = {}

    def _check(self, collection: str) -> None:
        if collection not in self._collections:
            raise ValueError(f"collection {collection!r} is not part of this transaction")

    def read(self, collection: str) -> Records:
        self._check(collection)
        if collection in self.pending:
            return copy.deepcopy(self.pending[collection])
        return self._store._load(collection)

    def write(self, collection: str, records: Records) -> None:
        self._check(collection)
        self.pending[collection] = list(records)


class RecordStore(ABC):
    """
    Gemeinsame Basis: Sperren pro Collection, read/write/transaction.
    Unterklassen liefern nur _load/_save/_exists.
    """

    def __init__(self):
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, collection: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(collection)
            if lock is None:
                lock = self._locks[collection] = threading.RLock()
            return lock

    # --- Backend-Hooks ---
    @abstractmethod
    def _load(self, collection: str) -> Records:
        ...

    @abstractmethod
    def _save(self, changes: dict[str, Records]) -> None:
        ...

    @abstractmethod
    def _exists(self, collection: str) -> bool:
        ...

    # --- öffentliche API ---
    def read(self, collection: str) -> Records:
        with self._lock_for(collection):
            return self._load(collection)

    def write(self, collection: str, records: Records) -> None:
        with self._lock_for(collection):
            self._save({collection: list(records)})

    def ensure(self, collection: str) -> None:
        with self._lock_for(collection):
            if not self._exists(collection):
                self._save({collection: []})
                logger.info("[STORE] Leere Collection %r angelegt.", collection)

    @contextmanager
    def transaction(self, *collections: str) -> Iterator[Transaction]:
        # feste Reihenfolge, damit sich zwei Transaktionen nicht gegenseitig blockieren
        names = tuple(sorted(set(collections)))
        locks = [self._lock_for(name) for name in names]
        for lock in locks:
            lock.acquire()
        try:
            tx = Transaction(self, names)
            yield tx
            if tx.pending:
                self._save(tx.pending)
        finally:
            for lock in reversed(locks):
                lock.release()

    def close(self) -> None:
        pass


class JsonRecordStore(RecordStore):
    """Eine <collection>.json pro Collection im Datenverzeichnis."""

    def __init__(self, data_dir: Path):
        super().__init__()
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _exists(self, collection: str) -> bool:
        return self._path(collection).exists()

    def _load(self, collection: str) -> Records:
        path = self._path(collection)
        if not path.exists():
            return []
        return orjson.loads(path.read_bytes())

    def _save(self, changes: dict[str, Records]) -> None:
        # pro Datei atomar (tmp + rename), über mehrere Dateien hinweg nicht
        for collection, records in changes.items():
            path = self._path(collection)
            fd, tmp = tempfile.mkstemp(dir=self.data_dir, prefix=f".{collection}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(orjson.dumps(records, option=orjson.OPT_INDENT_2))
                os.replace(tmp, path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise


class SqlRecordStore(RecordStore):
    """Collections als JSON-Spalte in einer SQLite-Tabelle (via SQLAlchemy)."""

    def __init__(self, database_url: str):
        super().__init__()
        self.engine = make_engine(database_url)
        Base.metadata.create_all(bind=self.engine)
        self.SessionLocal: sessionmaker = make_session_factory(self.engine)

    def _exists(self, collection: str) -> bool:
        with self.SessionLocal() as db:
            return db.get(CollectionORM, collection) is not None

    def _load(self, collection: str) -> Records:
        with self.SessionLocal() as db:
            row = db.execute(
                select(CollectionORM).where(CollectionORM.name == collection)
            ).scalar_one_or_none()
            if row is None:
                return []
            return copy.deepcopy(row.records)

    def _save(self, changes: dict[str, Records]) -> None:
        # alle Collections in einer DB-Transaktion
        with self.SessionLocal() as db:
            with db.begin():
                for collection, records in changes.items():
                    row = db.get(CollectionORM, collection)
                    if row is None:
                        row = CollectionORM(name=collection, records=[], version=0)
                        db.add(row)
                    row.records = copy.deepcopy(records)
                    row.version = (row.version or 0) + 1
                    row.updated_at = utc_now()

    def close(self) -> None:
        self.engine.dispose()


def make_store(settings: Settings) -> RecordStore:
    if settings.storage_backend == "json":
        logger.info("[STORE] JSON-Dateien unter %s", settings.data_dir)
        return JsonRecordStore(settings.data_dir)
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logger.info("[STORE] SQLite-Backend (%s)", settings.resolved_database_url())
    return SqlRecordStore(settings.resolved_database_url())
