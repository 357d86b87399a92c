"""Catalog errors and their JSON rendering."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import jsonify
from pydantic import ValidationError


logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for catalog mapping failures."""

    error_code = "catalog_error"
    status_code = 400


class GenreNotFoundError(CatalogError, ValueError):
    """Raised when a genre id or name does not resolve to a known genre."""

    error_code = "genre_not_found"

    def __init__(self, genre_id: Optional[int] = None, name: Optional[str] = None):
        self.genre_id = genre_id
        self.name = name
        if name is not None:
            message = f"Genre not found with name: {name}"
        else:
            message = f"Genre not found with id: {genre_id}"
        super().__init__(message)


def _error_body(error: str, message: str, status_code: int, details: Optional[Dict[str, Any]] = None) -> dict:
    body = {
        "error": error,
        "message": message,
        "status_code": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        body["details"] = details
    return body


def _validation_details(exc: ValidationError) -> Dict[str, str]:
    details: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        # first message per field wins
        details.setdefault(field, err.get("msg", "invalid value"))
    return details


def register_error_handlers(app) -> None:
    """Render catalog and request validation errors as JSON 400 responses."""

    @app.errorhandler(CatalogError)
    def _handle_catalog_error(exc: CatalogError):
        logger.warning("Catalog request rejected: %s", exc)
        return jsonify(_error_body(exc.error_code, str(exc), exc.status_code)), exc.status_code

    @app.errorhandler(ValidationError)
    def _handle_validation_error(exc: ValidationError):
        details = _validation_details(exc)
        logger.info("Request validation failed on %d field(s)", len(details))
        return (
            jsonify(
                _error_body(
                    "validation_error",
                    "Request payload failed validation",
                    400,
                    details,
                )
            ),
            400,
        )


__all__ = ["CatalogError", "GenreNotFoundError", "register_error_handlers"]
