# ============================
# 📁 escore/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

from fastapi_utils.tasks import repeat_every

# API-Router
from escore.api.accounts import router as accounts_router
from escore.api.categories import router as categories_router
from escore.api.matches import router as matches_router
from escore.api.news import router as news_router
from escore.api.polls import router as polls_router
from escore.api.uploads import router as uploads_router

from escore.config import COLLECTIONS, Settings, get_settings
from escore.errors import EscoreError
from escore.repositories.store import make_store
from escore.services.auth import purge_expired_sessions
from escore.services.seed import ensure_superadmin_and_admin

logger = logging.getLogger(__name__)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    where = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    parts = [p for p in (where, err.get("msg", "")) if p]
    return "Invalid request: " + " ".join(parts) if parts else "Invalid request"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    app = FastAPI(title="eScore API", default_response_class=ORJSONResponse)
    app.state.settings = settings
    app.state.store = make_store(settings)

    # --- GZip (Antworten ab 1 KB komprimieren) ---
    app.add_middleware(GZipMiddleware, minimum_size=1024)

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- hochgeladene Bilder ---
    app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")

    # --- Router ---
    app.include_router(news_router)
    app.include_router(accounts_router)
    app.include_router(polls_router)
    app.include_router(categories_router)
    app.include_router(matches_router)
    app.include_router(uploads_router)

    # --- Fehlerformat: immer {"error": "..."} ---
    @app.exception_handler(EscoreError)
    async def escore_error_handler(request: Request, exc: EscoreError):
        return ORJSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return ORJSONResponse(status_code=400, content={"error": _first_validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return ORJSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # --- Collections + Seed-Konten beim Start ---
    @app.on_event("startup")
    def prepare_store() -> None:
        store = app.state.store
        for collection in COLLECTIONS:
            store.ensure(collection)
        ensure_superadmin_and_admin(store, settings)
        logger.info("[START] eScore backend bereit auf http://localhost:%s", settings.port)

    # --- abgelaufene Sessions regelmäßig entfernen ---
    @app.on_event("startup")
    @repeat_every(seconds=settings.session_purge_seconds)
    def scheduled_session_purge() -> None:
        purge_expired_sessions(app.state.store)

    @app.on_event("shutdown")
    def close_store() -> None:
        app.state.store.close()

    return app

