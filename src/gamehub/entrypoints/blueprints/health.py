"""ABOUTME: Liveness and health check endpoints for monitoring service status
ABOUTME: /ping answers without touching anything, /health reports database status as JSON"""

from flask import Blueprint, jsonify
from flask.typing import ResponseReturnValue

from gamehub import __version__
from gamehub.entrypoints.extensions import get_unit_of_work

health_bp = Blueprint("health", __name__)


def check_database() -> tuple[bool, int | str]:
    """
    Check database connectivity and return account count.

    Returns:
        Tuple of (success: bool, account_count: int | "UNKNOWN")
    """
    try:
        with get_unit_of_work() as uow:
            account_count = len(list(uow.accounts.all()))
        return True, account_count
    except Exception:
        return False, "UNKNOWN"


@health_bp.route("/ping")
def ping() -> ResponseReturnValue:
    return "pong", 200, {"Content-Type": "text/plain; charset=utf-8"}


@health_bp.route("/health")
def health_check() -> ResponseReturnValue:
    """
    Health check endpoint returning JSON with system status.

    Returns:
        JSON response with:
        - database_ok: bool
        - account_count: int | "UNKNOWN"
        - version: str

    HTTP status 200 if the database is reachable, 500 otherwise.
    """
    db_ok, account_count = check_database()

    response_data = {
        "database_ok": db_ok,
        "account_count": account_count,
        "version": __version__,
    }

    status_code = 200 if db_ok else 500

    return jsonify(response_data), status_code
