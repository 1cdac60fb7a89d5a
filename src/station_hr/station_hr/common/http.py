"""JSON helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import NotFoundError, ReconciliationImbalance, ValidationError

logger = logging.getLogger(__name__)


def json_endpoint(view):
    """Wrap a view returning a dict; map domain errors to HTTP statuses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            result = view(*args, **kwargs)
            if isinstance(result, tuple):
                body, status = result
                return jsonify({"ok": True, **body}), status
            return jsonify({"ok": True, **(result or {})})
        except ValidationError as e:
            return jsonify({"ok": False, "error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"ok": False, "error": str(e)}), 404
        except ReconciliationImbalance as e:
            return jsonify({"ok": False, "error": str(e), "control": [g.to_dict() for g in e.groups]}), 409
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"ok": False, "error": "Error interno"}), 500

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
