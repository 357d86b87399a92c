#!/usr/bin/env python
# config.py
import os

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'contenidos-dev-secret'

    # Database (catalog)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'contenidos', 'database', 'instance', 'contenidos.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Runtime behavior
    DEBUG = _get_bool('DEBUG', False)
    PORT = _get_int('PORT', 5000)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
    # Structured JSON logs on stdout (container deployments)
    ENABLE_STRUCTURED_LOGS = _get_bool('ENABLE_STRUCTURED_LOGS', True)

    # OpenTelemetry export (optional)
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
    OTEL_EXPORTER_OTLP_HEADERS = os.getenv('OTEL_EXPORTER_OTLP_HEADERS')
    OTEL_EXPORTER_OTLP_INSECURE = _get_bool('OTEL_EXPORTER_OTLP_INSECURE', True)
    OTEL_SERVICE_NAME = os.getenv('OTEL_SERVICE_NAME', 'contenidos-service')
