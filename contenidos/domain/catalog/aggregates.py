from __future__ import annotations

import logging
import math
from typing import Optional

from sqlalchemy import func

from contenidos.database.db_manager import Comment, Rating, db


logger = logging.getLogger(__name__)


def round_rating(value: Optional[float]) -> Optional[float]:
    """Round an average rating to two decimals (half up); ``None`` stays ``None``."""
    if value is None:
        return None
    return math.floor(float(value) * 100.0 + 0.5) / 100.0


class RatingAggregator:
    """Interface for the average-rating queries used by the mappers."""

    def song_average(self, song_id: int) -> Optional[float]:  # pragma: no cover - interface
        raise NotImplementedError

    def album_average(self, album_id: int) -> Optional[float]:  # pragma: no cover - interface
        raise NotImplementedError


class CommentCounter:
    """Interface for the comment-count queries used by the mappers."""

    def song_count(self, song_id: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def album_count(self, album_id: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError


class DefaultRatingAggregator(RatingAggregator):
    def song_average(self, song_id: int) -> Optional[float]:
        return self._average(Rating.song_id == song_id)

    def album_average(self, album_id: int) -> Optional[float]:
        return self._average(Rating.album_id == album_id)

    @staticmethod
    def _average(criterion) -> Optional[float]:
        value = db.session.query(func.avg(Rating.value)).filter(criterion).scalar()
        return float(value) if value is not None else None


class DefaultCommentCounter(CommentCounter):
    def song_count(self, song_id: int) -> int:
        return self._count(Comment.song_id == song_id)

    def album_count(self, album_id: int) -> int:
        return self._count(Comment.album_id == album_id)

    @staticmethod
    def _count(criterion) -> int:
        return int(db.session.query(func.count(Comment.id)).filter(criterion).scalar() or 0)


__all__ = [
    "round_rating",
    "RatingAggregator",
    "CommentCounter",
    "DefaultRatingAggregator",
    "DefaultCommentCounter",
]
