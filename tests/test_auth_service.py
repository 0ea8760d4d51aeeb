# tests/test_auth_service.py
from datetime import timedelta

import pytest

from escore.config import Settings
from escore.core.records import to_iso, utc_now
from escore.errors import Forbidden, ValidationFailed
from escore.services.auth import (
    SUPERADMIN_ONLY,
    authorize,
    hash_password,
    issue_session,
    public_user,
    purge_expired_sessions,
    revoke_session,
    session_user,
    verify_password,
)


def _user(role="admin", password="pw"):
    return {"id": f"{role}-id", "name": role, "email": f"{role}@mail.com",
            "role": role, "passwordHash": hash_password(password)}


def test_hash_and_verify():
    h = hash_password("geheim")
    assert h != "geheim"
    assert verify_password("geheim", h)
    assert not verify_password("falsch", h)


def test_verify_handles_missing_or_broken_hash():
    assert not verify_password("x", None)
    assert not verify_password(None, hash_password("x"))
    assert not verify_password("x", "plaintext-not-a-hash")


def test_password_too_long_rejected():
    with pytest.raises(ValidationFailed):
        hash_password("x" * 73)


def test_public_user_hides_hash():
    assert "passwordHash" not in public_user(_user())


def test_session_roundtrip_and_revoke(store):
    user = _user()
    store.write("users", [user])
    with store.transaction("sessions") as tx:
        token = issue_session(tx, user, ttl_hours=1)

    assert session_user(store, token)["id"] == user["id"]
    assert revoke_session(store, token) is True
    assert session_user(store, token) is None
    assert revoke_session(store, token) is False


def test_expired_session_is_rejected_and_purged(store):
    user = _user()
    store.write("users", [user])
    past = utc_now() - timedelta(hours=2)
    store.write("sessions", [
        {"token": "old", "userId": user["id"], "role": "admin",
         "createdAt": to_iso(past), "expiresAt": to_iso(past + timedelta(hours=1))},
        {"token": "new", "userId": user["id"], "role": "admin",
         "createdAt": to_iso(utc_now()), "expiresAt": to_iso(utc_now() + timedelta(hours=1))},
    ])
    assert session_user(store, "old") is None
    assert purge_expired_sessions(store) == 1
    assert [s["token"] for s in store.read("sessions")] == ["new"]


def test_authorize_by_session_role(store):
    settings = Settings()
    admin = _user("admin")
    store.write("users", [admin])
    with store.transaction("sessions") as tx:
        token = issue_session(tx, admin, ttl_hours=1)

    assert authorize(store, settings, bearer=token)["id"] == admin["id"]
    with pytest.raises(Forbidden):
        authorize(store, settings, bearer=token, roles=SUPERADMIN_ONLY)


def test_authorize_superadmin_secret_checks_hash(store):
    settings = Settings()
    superadmin = {**_user("superadmin", password="root-pw"), "email": settings.superadmin_email}
    store.write("users", [superadmin])

    assert authorize(store, settings, secret="root-pw", roles=SUPERADMIN_ONLY)["role"] == "superadmin"
    with pytest.raises(Forbidden):
        authorize(store, settings, secret="wrong", roles=SUPERADMIN_ONLY)
    with pytest.raises(Forbidden):
        authorize(store, settings, roles=SUPERADMIN_ONLY)
