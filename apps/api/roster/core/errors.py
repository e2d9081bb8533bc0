"""
Error taxonomy for the roster API.

Each kind carries the HTTP status and the machine-readable ``error`` code used
in the error envelope built by ``roster.main``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class RosterError(Exception):
    """Base class for every error surfaced to API clients."""

    status_code = 500
    error = "internal_error"

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_envelope(self, request_id: Optional[str] = None) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.error,
            "message": self.message,
            "details": self.details if self.details is not None else {},
            "request_id": request_id,
        }


class InvalidIdError(RosterError):
    """Path parameter is not a positive integer."""

    status_code = 400
    error = "invalid_id"


class ValidationError(RosterError):
    """Request body or query failed schema validation."""

    status_code = 400
    error = "validation_error"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message, details or [])


class InvalidReferenceError(RosterError):
    """A foreign-key field names a parent row that does not exist."""

    status_code = 400
    error = "invalid_reference"


class NotFoundError(RosterError):
    status_code = 404
    error = "not_found"


class DuplicateError(RosterError):
    """Unique field or compound key collision."""

    status_code = 409
    error = "duplicate"


class DependencyConflictError(RosterError):
    """Delete blocked by dependent rows."""

    status_code = 409
    error = "dependency_conflict"


class UnexpectedStoreError(RosterError):
    status_code = 500
    error = "internal_error"


class UnauthorizedError(RosterError):
    status_code = 401
    error = "unauthorized"


class ForbiddenError(RosterError):
    status_code = 403
    error = "forbidden"


def pydantic_error_details(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic ``errors()`` into ``[{field, message}]``."""
    out: List[Dict[str, Any]] = []
    for e in errors:
        loc = [str(p) for p in e.get("loc", ()) if p not in ("body", "query", "path")]
        out.append({"field": ".".join(loc) or "body", "message": str(e.get("msg", "invalid value"))})
    return out
