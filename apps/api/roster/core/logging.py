"""
JSON event log.

One object per line: ts, level, message, request_id, event, module (+ extras).
The request id is carried in a context variable set by the HTTP middleware so
service code does not have to thread it through every call.
"""
from __future__ import annotations

import datetime
import json
import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional

_log = logging.getLogger("roster")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def configure_logging(level: str = "INFO") -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format="%(message)s")
    _log.setLevel(level)


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def emit(
    level: str,
    event: str,
    message: str,
    *,
    module: str,
    request_id: Optional[str] = None,
    **extra: Any,
) -> None:
    levelno = logging.getLevelName(level.upper())
    if not isinstance(levelno, int):
        levelno = logging.INFO
    if not _log.isEnabledFor(levelno):
        return

    payload: Dict[str, Any] = {
        "ts": _now_iso(),
        "level": level.lower(),
        "message": message,
        "request_id": request_id if request_id is not None else request_id_var.get(),
        "event": event,
        "module": module,
    }
    payload.update(extra)
    _log.log(levelno, json.dumps(payload, ensure_ascii=False, default=str))
