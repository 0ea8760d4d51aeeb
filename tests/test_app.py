# tests/test_app.py
import importlib
import sys

import orjson
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from escore.config import COLLECTIONS, Settings, get_settings
from escore.main import create_app


@pytest.mark.parametrize("backend", ["sqlite", "json"])
def test_startup_creates_every_collection(tmp_path, backend):
    settings = Settings(data_dir=tmp_path / "data", upload_dir=tmp_path / "uploads", storage_backend=backend)
    app = create_app(settings)
    with TestClient(app):
        store = app.state.store
        for collection in COLLECTIONS:
            assert store._exists(collection), collection


def test_startup_writes_empty_matches_file(tmp_path):
    data_dir = tmp_path / "data"
    settings = Settings(data_dir=data_dir, upload_dir=tmp_path / "uploads", storage_backend="json")
    with TestClient(create_app(settings)):
        pass
    matches_file = data_dir / "matches.json"
    assert matches_file.exists()
    assert orjson.loads(matches_file.read_bytes()) == []


def test_asgi_module_exposes_app(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delitem(sys.modules, "escore.asgi", raising=False)
    get_settings.cache_clear()
    try:
        asgi = importlib.import_module("escore.asgi")
        assert isinstance(asgi.app, FastAPI)
        with TestClient(asgi.app) as c:
            assert c.get("/api/news").json() == []
    finally:
        get_settings.cache_clear()


def test_validation_error_message_for_wrong_body_type(client):
    resp = client.post("/api/news", json=["not", "an", "object"])
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error.startswith("Invalid request: ")
    assert "  " not in error


def test_validation_error_message_names_field(client):
    resp = client.post("/api/polls", json={"question": "Q", "options": [{"nested": 1}, "B"]})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid request: options.0")
