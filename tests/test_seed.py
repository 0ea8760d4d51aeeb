# tests/test_seed.py
from escore.config import Settings
from escore.services.auth import verify_password
from escore.services.seed import ensure_superadmin_and_admin


def _settings(**overrides):
    return Settings(superadmin_password="root-pw", admin_password="admin-pw", **overrides)


def test_seed_creates_accounts_in_both_collections(store):
    settings = _settings()
    assert ensure_superadmin_and_admin(store, settings) is True

    users = store.read("users")
    admins = store.read("admins")
    assert [u["email"] for u in users] == ["admin@mail.com", "superadmin@mail.com"]
    assert [a["email"] for a in admins] == ["superadmin@mail.com", "admin@mail.com"]
    assert all("passwordHash" not in a for a in admins)

    superadmin = users[1]
    assert superadmin["role"] == "superadmin"
    assert verify_password("root-pw", superadmin["passwordHash"])
    assert "root-pw" not in str(users)


def test_seed_is_idempotent(store):
    settings = _settings()
    ensure_superadmin_and_admin(store, settings)
    before = (store.read("users"), store.read("admins"))
    assert ensure_superadmin_and_admin(store, settings) is False
    assert (store.read("users"), store.read("admins")) == before


def test_seed_never_overwrites_existing_record(store):
    store.write("admins", [{"id": "custom", "name": "Boss", "email": "superadmin@mail.com", "role": "superadmin"}])
    ensure_superadmin_and_admin(store, _settings())
    admins = store.read("admins")
    assert admins[0] == {"id": "custom", "name": "Boss", "email": "superadmin@mail.com", "role": "superadmin"}
    assert len([a for a in admins if a["email"] == "superadmin@mail.com"]) == 1


def test_seed_without_password_blocks_login(store):
    ensure_superadmin_and_admin(store, Settings())
    assert all(u["passwordHash"] is None for u in store.read("users"))


def test_seed_uses_configured_identity(store):
    ensure_superadmin_and_admin(store, _settings(superadmin_email="boss@escore.uz", superadmin_name="Boss"))
    emails = {a["email"] for a in store.read("admins")}
    assert "boss@escore.uz" in emails


def test_seed_accounts_script(settings, monkeypatch, capsys):
    from escore.repositories.store import make_store
    from escore.scripts import seed_accounts as script

    monkeypatch.setattr(script, "get_settings", lambda: settings)
    script.seed_accounts()
    assert "angelegt" in capsys.readouterr().out

    store = make_store(settings)
    assert len(store.read("admins")) == 2
    assert store.read("matches") == []
    store.close()
