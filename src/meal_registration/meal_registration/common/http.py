from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict

from flask import current_app, g, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    DomainError,
    DuplicateRecordError,
    TimeWindowError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (TimeWindowError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (DuplicateRecordError, 409),
    (BackendError, 503),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def payload() -> Dict[str, Any]:
    """JSON body of the request, or form fields when the client posted a form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def json_errors(view):
    """Turn domain exceptions into `{"success": false, "message": ...}` responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), status_for(e)
        except Exception as e:
            logger.exception("unhandled error in %s", request.path)
            if bool(current_app.config.get("DEBUG", False)):
                message = f"Erro interno do sistema: {e}"
            else:
                message = "Erro interno do sistema"
            return jsonify({"success": False, "message": message}), 500

    return wrapper


def require_admin(sessions, auth):
    """Decorator factory: the view runs only with a live session of an active admin (exposed as `g.admin`).

    A session whose account was deactivated meanwhile is cleared.
    """

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            admin = sessions.load()
            if admin is not None and not auth.is_active(admin.admin_id):
                sessions.clear()
                admin = None
            if admin is None:
                return jsonify({"success": False, "message": "Sessão expirada. Faça login novamente."}), 401
            g.admin = admin
            return view(*args, **kwargs)

        return wrapper

    return admin_required
