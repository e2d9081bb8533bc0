"""
Application factory.

Run with ``uvicorn roster.main:create_app --factory --port 7000`` or the
``roster-api`` console script. Importing this module has no side effects; the
engine and store are built per ``create_app()`` call.
"""
from __future__ import annotations

import uuid
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roster.core.config import Settings, get_settings
from roster.core.db import db_health, init_db, make_engine
from roster.core.errors import RosterError, pydantic_error_details
from roster.core.logging import configure_logging, emit, request_id_var
from roster.core.store import Store
from roster.modules.characters.router import router as characters_router
from roster.modules.classes.router import router as classes_router
from roster.modules.factions.router import router as factions_router
from roster.modules.factions.service import seed_factions
from roster.modules.race_classes.router import router as race_classes_router
from roster.modules.races.router import router as races_router
from roster.modules.specializations.router import router as specializations_router

# Contract locks:
# - X-Request-Id in/out (missing -> generated; always echoed back; also on errors)
# - Error envelope keys: success, error, message, details, request_id
# - /health keys: status, version, db


def _err_envelope(error: str, message: str, request_id: Optional[str], details: Any, status_code: int) -> JSONResponse:
    headers = {}
    if request_id:
        headers["X-Request-Id"] = request_id
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
        headers=headers,
    )


def _rid(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def _install_observability(app: FastAPI) -> None:
    @app.middleware("http")
    async def _request_id_mw(request: Request, call_next):
        rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex.upper()
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            emit("info", "http.request.start", f"{request.method} {request.url.path}", module=__name__)
            try:
                resp = await call_next(request)
            except Exception as e:
                emit("error", "http.request.exception", str(e), module=__name__)
                raise
            resp.headers["X-Request-Id"] = rid
            emit(
                "info",
                "http.request.end",
                f"{request.method} {request.url.path} -> {resp.status_code}",
                module=__name__,
                status_code=resp.status_code,
            )
            return resp
        finally:
            request_id_var.reset(token)

    @app.exception_handler(RosterError)
    async def _roster_exc_handler(request: Request, exc: RosterError):
        rid = _rid(request)
        body = exc.to_envelope(rid)
        return _err_envelope(body["error"], body["message"], rid, body["details"], exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        error = "not_found" if exc.status_code == 404 else "http_error"
        return _err_envelope(error, str(exc.detail), _rid(request), {"status_code": exc.status_code}, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _validation_exc_handler(request: Request, exc: RequestValidationError):
        details = pydantic_error_details(list(exc.errors()))
        emit("warning", "http.request.invalid", "request validation failed", module=__name__, details=details)
        return _err_envelope("validation_error", "Invalid input data", _rid(request), details, 400)

    @app.exception_handler(Exception)
    async def _unhandled_exc_handler(request: Request, exc: Exception):
        # the middleware has already reset request_id_var by the time this runs
        emit(
            "error",
            "http.request.unhandled",
            repr(exc),
            module=__name__,
            request_id=_rid(request),
            type=type(exc).__name__,
        )
        return _err_envelope("internal_error", "internal server error", _rid(request), {"type": type(exc).__name__}, 500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = make_engine(settings.database_url)
    init_db(engine)
    store = Store(engine)
    if settings.seed_factions:
        seed_factions(store)

    app = FastAPI(title="Roster API", version=settings.app_version)
    app.state.settings = settings
    app.state.store = store
    _install_observability(app)

    @app.get("/health")
    def health():
        db = db_health(engine)
        return {
            "status": "ok" if db["status"] == "ok" else "degraded",
            "version": settings.app_version,
            "db": db,
        }

    app.include_router(factions_router)
    app.include_router(races_router)
    app.include_router(classes_router)
    app.include_router(specializations_router)
    app.include_router(characters_router)
    app.include_router(race_classes_router)

    emit("info", "app.started", "roster api ready", module=__name__, db=db_health(engine)["kind"])
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("roster.main:create_app", factory=True, host=settings.api_host, port=settings.api_port)
