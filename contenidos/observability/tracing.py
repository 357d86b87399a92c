import logging
import os
from typing import Dict, Optional

from flask import Flask

try:
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.flask import FlaskInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
except Exception:  # pragma: no cover - optional dependency
    FlaskInstrumentor = None  # type: ignore

logger = logging.getLogger(__name__)

# Probe and scrape endpoints; comma-separated regexes as FlaskInstrumentor expects
UNTRACED_URLS = "healthz,readyz,metrics"


def parse_otlp_headers(raw: Optional[str]) -> Optional[Dict[str, str]]:
    """Turn ``"key=value,key2=value2"`` into a header dict (None when empty)."""
    if not raw:
        return None
    headers: Dict[str, str] = {}
    for pair in raw.split(","):
        key, sep, value = pair.partition("=")
        if sep and key.strip():
            headers[key.strip()] = value.strip()
    return headers or None


def _setting(app: Flask, name: str) -> Optional[str]:
    return app.config.get(name) or os.getenv(name)


def init_tracing(app: Flask) -> bool:
    """Export request spans of the catalog service over OTLP.

    Does nothing unless OpenTelemetry is installed and an endpoint is
    configured. Health, readiness and metrics requests are not traced.
    Returns True when instrumentation was installed.
    """
    if FlaskInstrumentor is None:  # pragma: no cover - optional dependency
        return False

    endpoint = _setting(app, "OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        return False

    service_name = app.config.get("OTEL_SERVICE_NAME", "contenidos-service")
    resource = Resource.create({"service.name": service_name, "service.namespace": "catalog"})

    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(
        endpoint=endpoint,
        headers=parse_otlp_headers(_setting(app, "OTEL_EXPORTER_OTLP_HEADERS")),
        insecure=app.config.get("OTEL_EXPORTER_OTLP_INSECURE", True),
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    FlaskInstrumentor().instrument_app(app, excluded_urls=UNTRACED_URLS)
    app.extensions["tracer_provider"] = provider
    logger.info("Tracing %s to %s (untraced: %s)", service_name, endpoint, UNTRACED_URLS)
    return True
