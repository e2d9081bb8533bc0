from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Request

from roster.core.config import Settings
from roster.core.errors import ForbiddenError, UnauthorizedError
from roster.core.store import Store


def get_store(request: Request) -> Store:
    # built once by create_app(); never a module-level handle
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_writer(request: Request, settings: Settings = Depends(get_app_settings)) -> Optional[str]:
    """
    Write gate. The OAuth proxy in front of the API puts the signed-in e-mail
    in a header; only allow-listed addresses may mutate. An empty allow-list
    disables the gate.
    """
    if not settings.write_allowlist:
        return None
    email = (request.headers.get(settings.auth_email_header) or "").strip().lower()
    if not email:
        raise UnauthorizedError("Sign in required", {"header": settings.auth_email_header})
    if email not in settings.write_allowlist:
        raise ForbiddenError("This account is not allowed to modify the roster", {"email": email})
    return email


def flag(raw: Optional[str]) -> bool:
    return raw == "true"


StoreDep = Annotated[Store, Depends(get_store)]
WriterDep = Depends(require_writer)
