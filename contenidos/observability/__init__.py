# noqa: D104 - package initialization
from .logging import configure_structured_logging  # noqa: F401
from .metrics import metrics_blueprint, record_entity_write, record_genre_lookup_failure, record_mapping  # noqa: F401
from .tracing import init_tracing  # noqa: F401
