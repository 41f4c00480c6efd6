from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, flash, get_flashed_messages, has_request_context, jsonify, request, session

from ..core.exceptions import AuthenticationError, NotFoundError, RemoteStoreError, ValidationError

logger = logging.getLogger(__name__)


def flash_notify(message: str, category: str) -> None:
    """Notifier for AttendanceStore: user-visible messages go to Flask flash."""
    if has_request_context():
        flash(message, category)
    else:
        logger.info("[%s] %s", category, message)


def request_data() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def json_response(payload: dict, status: int = 200):
    body = dict(payload)
    body["notifications"] = [
        {"category": category, "message": message}
        for category, message in get_flashed_messages(with_categories=True)
    ]
    return jsonify(body), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("Please log in to continue", "warning")
            return json_response({"error": "Authentication required"}, 401)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return json_response({"error": str(e)}, 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return json_response({"error": str(e)}, 401)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return json_response({"error": str(e)}, 404)

    @app.errorhandler(RemoteStoreError)
    def _remote(e: RemoteStoreError):
        # The store already logged and notified; keep driver details out of the response.
        return json_response({"error": "The data store could not complete the request"}, 502)
