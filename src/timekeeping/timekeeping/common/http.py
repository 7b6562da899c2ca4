from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConflictError, DomainError, NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StoreError, 500),
)


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def error_response(exc: Exception):
    """Map a raised exception to a JSON error response."""
    if isinstance(exc, DomainError):
        for exc_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, exc_type):
                if status >= 500:
                    logger.error("%s %s failed: %s", request.method, request.path, exc)
                return json_error(str(exc), status)
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return json_error("Internal server error", 500)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Not authenticated", 401)
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
