"""Catalog mapping layer (songs, albums) and its aggregate collaborators."""

from .aggregates import (
    CommentCounter,
    DefaultCommentCounter,
    DefaultRatingAggregator,
    RatingAggregator,
    round_rating,
)
from .album_mapper import AlbumMapper
from .song_mapper import SongMapper

__all__ = [
    "AlbumMapper",
    "SongMapper",
    "RatingAggregator",
    "CommentCounter",
    "DefaultRatingAggregator",
    "DefaultCommentCounter",
    "round_rating",
]
