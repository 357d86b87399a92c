from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from contenidos.database.db_manager import db

health_bp = Blueprint("health_bp", __name__)
logger = logging.getLogger(__name__)


def _database_check() -> str:
    try:
        db.session.execute(text("SELECT 1"))
        return "ok"
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.warning("Database health probe failed: %s", exc)
        return f"error: {exc}"


@health_bp.route("/healthz")
def healthz():
    checks = {"database": _database_check()}
    mappers = ("song_mapper", "album_mapper")
    checks["mappers"] = "ok" if all(current_app.extensions.get(name) for name in mappers) else "unavailable"

    healthy = checks["database"] == "ok"
    status = 200 if healthy else 503
    return jsonify({"status": "ok" if healthy else "degraded", "checks": checks}), status


@health_bp.route("/readyz")
def readyz():
    database = _database_check()
    ready = database == "ok"
    payload = {
        "status": "ready" if ready else "blocked",
        "database": database,
    }
    return jsonify(payload), 200 if ready else 503
