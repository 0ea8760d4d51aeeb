# tests/test_store.py
import threading

import orjson
import pytest

from escore.config import Settings
from escore.models_sql import CollectionORM
from escore.repositories.store import JsonRecordStore, RecordStore, SqlRecordStore, make_store


def test_read_missing_collection_is_empty(store):
    assert store.read("news") == []


def test_write_replaces_whole_collection(store):
    store.write("news", [{"id": "a"}, {"id": "b"}])
    store.write("news", [{"id": "c"}])
    assert store.read("news") == [{"id": "c"}]


def test_read_returns_independent_copies(store):
    store.write("polls", [{"id": "p", "votes": {"x": 1}}])
    polls = store.read("polls")
    polls[0]["votes"]["x"] = 99
    assert store.read("polls")[0]["votes"]["x"] == 1


def test_ensure_creates_empty_collection_once(store):
    store.ensure("matches")
    store.write("matches", [{"id": "m"}])
    store.ensure("matches")
    assert store.read("matches") == [{"id": "m"}]


def test_transaction_commits_all_collections(store):
    with store.transaction("admins", "users") as tx:
        tx.write("admins", [{"id": "1"}])
        tx.write("users", [{"id": "1", "passwordHash": None}])
    assert store.read("admins") == [{"id": "1"}]
    assert store.read("users") == [{"id": "1", "passwordHash": None}]


def test_transaction_reads_own_pending_writes(store):
    with store.transaction("news") as tx:
        tx.write("news", [{"id": "x"}])
        assert tx.read("news") == [{"id": "x"}]


def test_transaction_discards_writes_on_error(store):
    store.write("news", [{"id": "old"}])
    with pytest.raises(RuntimeError):
        with store.transaction("news") as tx:
            tx.write("news", [])
            raise RuntimeError("boom")
    assert store.read("news") == [{"id": "old"}]


def test_transaction_rejects_undeclared_collection(store):
    with store.transaction("news") as tx:
        with pytest.raises(ValueError):
            tx.read("users")


def test_concurrent_increments_are_not_lost(store):
    store.write("polls", [{"id": "p", "votes": {"yes": 0}}])

    def worker():
        for _ in range(20):
            with store.transaction("polls") as tx:
                polls = tx.read("polls")
                polls[0]["votes"]["yes"] += 1
                tx.write("polls", polls)

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.read("polls")[0]["votes"]["yes"] == 100


def test_json_store_writes_pretty_file(tmp_path):
    s = JsonRecordStore(tmp_path)
    s.write("categories", [{"id": "1", "name": "Football"}])
    raw = (tmp_path / "categories.json").read_bytes()
    assert orjson.loads(raw) == [{"id": "1", "name": "Football"}]
    assert b'\n  {' in raw
    assert not list(tmp_path.glob("*.tmp"))


def test_json_store_propagates_malformed_file(tmp_path):
    (tmp_path / "news.json").write_text("{not json")
    s = JsonRecordStore(tmp_path)
    with pytest.raises(orjson.JSONDecodeError):
        s.read("news")


def test_sql_store_counts_versions(tmp_path):
    s = SqlRecordStore(f"sqlite:///{tmp_path / 'v.sqlite3'}")
    s.write("news", [])
    s.write("news", [{"id": "1"}])
    with s.SessionLocal() as db:
        assert db.get(CollectionORM, "news").version == 2
    s.close()


def test_ensure_marks_collection_as_existing(store):
    assert not store._exists("matches")
    store.ensure("matches")
    assert store._exists("matches")
    assert store.read("matches") == []


def test_record_store_is_abstract():
    with pytest.raises(TypeError):
        RecordStore()


def test_make_store_picks_backend(tmp_path):
    json_store = make_store(Settings(data_dir=tmp_path / "a", storage_backend="json"))
    sql_store = make_store(Settings(data_dir=tmp_path / "b"))
    assert isinstance(json_store, JsonRecordStore)
    assert isinstance(sql_store, SqlRecordStore)
    assert (tmp_path / "b" / "escore.sqlite3").exists()
    sql_store.close()
