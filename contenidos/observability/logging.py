import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import g, has_app_context, has_request_context, request

try:
    from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
    from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
    from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
    from opentelemetry.sdk.resources import Resource
except Exception:  # pragma: no cover - Opentelemetry optional
    LoggerProvider = None  # type: ignore
    LoggingHandler = None  # type: ignore

_CONTEXT_FIELDS = ("request_id", "path", "method", "remote_addr")
# Catalog-specific extras a mapper or handler may attach via ``extra=``
_EXTRA_FIELDS = ("entity", "entity_id", "view", "genre_id")


class RequestContextFilter(logging.Filter):
    """Attach request-scoped metadata to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(g, "request_id", None) if has_app_context() else None
        if has_request_context():
            record.path = request.path
            record.method = request.method
            record.remote_addr = request.headers.get("X-Forwarded-For", request.remote_addr)
        else:
            record.path = None
            record.method = None
            record.remote_addr = None
        return True


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def __init__(self, service_name: str = "contenidos-service"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _CONTEXT_FIELDS:
            payload[field] = getattr(record, field, None)
        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _build_otlp_handler(app) -> Optional[logging.Handler]:
    """Configure OpenTelemetry logging handler if exporter is available."""
    if LoggerProvider is None or LoggingHandler is None:
        return None

    endpoint = (
        app.config.get("OTEL_EXPORTER_OTLP_ENDPOINT")
        or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    )
    if not endpoint:
        return None

    resource = Resource.create(
        {
            "service.name": app.config.get("OTEL_SERVICE_NAME", "contenidos-service"),
        }
    )
    provider = LoggerProvider(resource=resource)
    exporter = OTLPLogExporter(
        endpoint=endpoint,
        insecure=app.config.get("OTEL_EXPORTER_OTLP_INSECURE", True),
    )
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    return LoggingHandler(level=logging.INFO, logger_provider=provider)


def configure_structured_logging(app) -> None:
    """Attach structured stdout logging (+ optional OTLP export) to the root logger."""
    if not app.config.get("ENABLE_STRUCTURED_LOGS", True):
        return

    root = logging.getLogger()
    context_filter = RequestContextFilter()
    json_formatter = JsonFormatter(app.config.get("OTEL_SERVICE_NAME", "contenidos-service"))

    has_json_stream = any(
        isinstance(handler, logging.StreamHandler)
        and isinstance(getattr(handler, "formatter", None), JsonFormatter)
        for handler in root.handlers
    )
    if not has_json_stream:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(json_formatter)
        stream_handler.addFilter(context_filter)
        root.addHandler(stream_handler)

    otlp_handler = _build_otlp_handler(app)
    if otlp_handler:
        otlp_handler.setFormatter(json_formatter)
        otlp_handler.addFilter(context_filter)
        root.addHandler(otlp_handler)
