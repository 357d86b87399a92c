from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CATALOG_MAPPINGS = Counter(
    "contenidos_catalog_mappings_total",
    "Entities converted into response DTOs, by entity and view.",
    ["entity", "view"],
)
CATALOG_UPDATES = Counter(
    "contenidos_catalog_entity_writes_total",
    "Entities built or patched from create/edit requests.",
    ["entity", "operation"],
)
GENRE_LOOKUP_FAILURES = Counter(
    "contenidos_genre_lookup_failures_total",
    "Create/edit requests rejected because the genre id did not resolve.",
)


def record_mapping(entity: str, view: str) -> None:
    CATALOG_MAPPINGS.labels(entity=entity, view=view).inc()


def record_entity_write(entity: str, operation: str) -> None:
    CATALOG_UPDATES.labels(entity=entity, operation=operation).inc()


def record_genre_lookup_failure() -> None:
    GENRE_LOOKUP_FAILURES.inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
