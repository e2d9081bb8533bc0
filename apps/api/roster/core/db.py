"""
DB utilities (sqlite default).

Defaults:
- DATABASE_URL: sqlite:///./data/roster.db

The engine is built once by the application factory and handed to the Store;
nothing here keeps a module-level engine.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def _repo_root() -> Path:
    # apps/api/roster/core/db.py -> repo root = parents[4]
    return Path(__file__).resolve().parents[4]


def is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or database_url.endswith(":memory:")


def resolve_sqlite_path(database_url: str) -> Optional[Path]:
    if not database_url.startswith("sqlite:///") or is_memory_url(database_url):
        return None
    p = database_url[len("sqlite:///") :]

    # absolute unix
    if p.startswith("/"):
        return Path(p)

    # absolute windows drive, both C:/ and C:\ forms
    if len(p) >= 3 and p[1] == ":" and (p[2] == "/" or p[2] == "\\"):
        return Path(p)

    # relative -> repo root
    return (_repo_root() / p).resolve()


def _enable_sqlite_fks(dbapi_conn: Any, _record: Any) -> None:
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def make_engine(database_url: str) -> Engine:
    url = database_url
    kwargs: Dict[str, Any] = {}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if is_memory_url(url):
            # one shared connection, otherwise every session sees an empty db
            kwargs["poolclass"] = StaticPool
        else:
            sp = resolve_sqlite_path(url)
            if sp is not None:
                sp.parent.mkdir(parents=True, exist_ok=True)
                url = "sqlite:///" + sp.as_posix()

    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fks)
    return engine


def init_db(engine: Engine) -> None:
    # table models register on SQLModel.metadata at import time
    from roster.modules import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def db_health(engine: Engine) -> Dict[str, Any]:
    url = engine.url
    kind = url.get_backend_name()
    path = url.database if kind == "sqlite" else url.render_as_string(hide_password=True)

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok", "kind": kind, "path": path}
    except Exception as e:
        return {"status": "error", "kind": kind, "path": path, "error": str(e)}
