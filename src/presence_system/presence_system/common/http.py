from __future__ import annotations

from flask import jsonify

from ..core.exceptions import DomainError, ExpiredError, NotFoundError, StorageError, ValidationError

_STATUS_BY_ERROR = {
    ValidationError: 400,
    NotFoundError: 404,
    ExpiredError: 410,
    StorageError: 503,
}


def error_response(exc: DomainError):
    """Shared JSON error body used by every controller."""

    status = next((s for cls, s in _STATUS_BY_ERROR.items() if isinstance(exc, cls)), 400)
    return jsonify({"success": False, "error": exc.code, "message": str(exc)}), status
