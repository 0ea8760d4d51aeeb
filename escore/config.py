# ============================
# 📁 escore/config.py
# (Konfiguration aus Umgebungsvariablen)

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, SecretStr

COLLECTIONS: tuple[str, ...] = (
    "news",
    "comments",
    "polls",
    "admins",
    "users",
    "categories",
    "matches",
    "sessions",
)


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000

    data_dir: Path = Path("data")
    upload_dir: Path = Path("uploads")
    storage_backend: Literal["sqlite", "json"] = "sqlite"
    database_url: str | None = None

    # Seed-Konten: Passwörter kommen ausschließlich aus der Umgebung
    superadmin_id: str = "superadmin-1"
    superadmin_name: str = "Asosiy Admin"
    superadmin_email: str = "superadmin@mail.com"
    superadmin_password: SecretStr | None = None

    admin_id: str = "admin-1"
    admin_name: str = "Admin"
    admin_email: str = "admin@mail.com"
    admin_password: SecretStr | None = None

    staff_default_password: SecretStr | None = None

    session_ttl_hours: int = 24
    session_purge_seconds: int = 3600

    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'escore.sqlite3'}"


_ENV_MAP = {
    "HOST": "host",
    "PORT": "port",
    "DATA_DIR": "data_dir",
    "UPLOAD_DIR": "upload_dir",
    "STORAGE_BACKEND": "storage_backend",
    "DATABASE_URL": "database_url",
    "SUPERADMIN_ID": "superadmin_id",
    "SUPERADMIN_NAME": "superadmin_name",
    "SUPERADMIN_EMAIL": "superadmin_email",
    "SUPERADMIN_PASSWORD": "superadmin_password",
    "ADMIN_ID": "admin_id",
    "ADMIN_NAME": "admin_name",
    "ADMIN_EMAIL": "admin_email",
    "ADMIN_PASSWORD": "admin_password",
    "STAFF_DEFAULT_PASSWORD": "staff_default_password",
    "SESSION_TTL_HOURS": "session_ttl_hours",
    "SESSION_PURGE_SECONDS": "session_purge_seconds",
    "LOG_LEVEL": "log_level",
}


def settings_from_env(environ: dict[str, str] | None = None) -> Settings:
    """Baut Settings aus Umgebungsvariablen; leere Werte zählen als nicht gesetzt."""
    env = os.environ if environ is None else environ
    values = {
        field: env[var]
        for var, field in _ENV_MAP.items()
        if env.get(var, "").strip()
    }
    origins = env.get("CORS_ORIGINS", "").strip()
    if origins:
        values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
    return Settings(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return settings_from_env()
