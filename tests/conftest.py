# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from escore.config import Settings
from escore.main import create_app
from escore.repositories.store import JsonRecordStore, SqlRecordStore

SUPERADMIN_PASSWORD = "super-secret"
ADMIN_PASSWORD = "admin-secret"
STAFF_PASSWORD = "staff-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=tmp_path / "data",
        upload_dir=tmp_path / "uploads",
        superadmin_password=SUPERADMIN_PASSWORD,
        admin_password=ADMIN_PASSWORD,
        staff_default_password=STAFF_PASSWORD,
    )


@pytest.fixture(params=["sqlite", "json"])
def store(request, tmp_path):
    if request.param == "json":
        s = JsonRecordStore(tmp_path / "data")
    else:
        s = SqlRecordStore(f"sqlite:///{tmp_path / 'store.sqlite3'}")
    yield s
    s.close()


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


def login(client, email, password) -> str:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture
def superadmin_headers(client, settings):
    token = login(client, settings.superadmin_email, SUPERADMIN_PASSWORD)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client, settings):
    token = login(client, settings.admin_email, ADMIN_PASSWORD)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(client):
    client.post("/api/auth/register", json={"name": "Ali", "email": "ali@mail.com", "password": "pw-ali"})
    token = login(client, "ali@mail.com", "pw-ali")
    return {"Authorization": f"Bearer {token}"}
