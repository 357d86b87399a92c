from __future__ import annotations

import logging

from contenidos.exceptions import GenreNotFoundError
from contenidos.models.genres import Genre
from contenidos.observability.metrics import record_genre_lookup_failure


logger = logging.getLogger(__name__)


def resolve_genre(genre_id) -> Genre:
    """Genre.from_id, counting and logging rejected ids before re-raising."""
    try:
        return Genre.from_id(genre_id)
    except GenreNotFoundError:
        record_genre_lookup_failure()
        logger.info("Rejected unknown genre id", extra={"genre_id": genre_id})
        raise


__all__ = ["resolve_genre"]
