#!/usr/bin/env python
"""
Song entity <-> DTO conversion.

Response views are enriched with the average rating and comment count of the
song, fetched through the injected collaborators on every call.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from contenidos.database.db_manager import AlbumTrack, Song
from contenidos.domain.catalog.aggregates import CommentCounter, RatingAggregator, round_rating
from contenidos.domain.catalog.genre_resolution import resolve_genre
from contenidos.models.dto import (
    AlbumSummaryDTO,
    AlbumSummaryWithTrackDTO,
    CreateSongDTO,
    EditSongDTO,
    SongDetailDTO,
    SongDTO,
)
from contenidos.observability.metrics import record_entity_write, record_mapping


logger = logging.getLogger(__name__)


class SongMapper:
    def __init__(self, rating_aggregator: RatingAggregator, comment_counter: CommentCounter):
        self.rating_aggregator = rating_aggregator
        self.comment_counter = comment_counter

    def _scalar_fields(self, song: Song) -> dict:
        average = self.rating_aggregator.song_average(song.id)
        total_comments = self.comment_counter.song_count(song.id)
        return {
            "id": song.id,
            "title": song.title,
            "artist_id": song.artist_id,
            "genre": song.genre.display_name,
            "price": song.price,
            "duration_seconds": song.duration_seconds,
            "artwork_url": song.artwork_url,
            "audio_url": song.audio_url,
            "play_count": song.play_count or 0,
            "average_rating": round_rating(average),
            "total_comments": total_comments or 0,
            "published_at": song.published_at,
            "description": song.description,
        }

    def to_dto(self, song: Optional[Song]) -> Optional[SongDTO]:
        """Basic view; only the first album the song appears on is summarised."""
        if song is None:
            return None

        album_summary = None
        if song.albums:
            first = song.albums[0].album
            album_summary = AlbumSummaryDTO(
                id=first.id,
                title=first.title,
                artwork_url=first.artwork_url,
            )

        record_mapping("song", "basic")
        return SongDTO(**self._scalar_fields(song), album=album_summary)

    def to_detail_dto(self, song: Optional[Song]) -> Optional[SongDetailDTO]:
        """Detailed view listing every album the song belongs to, in order."""
        if song is None:
            return None

        albums = [self._album_with_track(entry) for entry in (song.albums or [])]

        record_mapping("song", "detail")
        logger.debug("Mapped song %s with %d album(s)", song.id, len(albums))
        return SongDetailDTO(**self._scalar_fields(song), albums=albums)

    @staticmethod
    def _album_with_track(entry: AlbumTrack) -> AlbumSummaryWithTrackDTO:
        return AlbumSummaryWithTrackDTO(
            id=entry.album.id,
            title=entry.album.title,
            artwork_url=entry.album.artwork_url,
            track_number=entry.track_number,
        )

    def to_entity(self, dto: Optional[CreateSongDTO], artist_id: int) -> Optional[Song]:
        """Build a new, unsaved Song owned by ``artist_id``.

        Raises GenreNotFoundError if ``dto.genre_id`` is unknown.
        """
        if dto is None:
            return None

        genre = resolve_genre(dto.genre_id)
        song = Song(
            title=dto.title,
            artist_id=artist_id,
            genre=genre,
            price=dto.price,
            duration_seconds=dto.duration_seconds,
            artwork_url=dto.artwork_url,
            audio_url=dto.audio_url,
            description=dto.description,
            play_count=0,
        )
        record_entity_write("song", "create")
        return song

    def update_entity(self, song: Optional[Song], dto: Optional[EditSongDTO]) -> None:
        """Copy the non-None fields of ``dto`` onto ``song`` in place.

        The genre is resolved before anything is written, so an unknown genre
        id leaves the song untouched.
        """
        if song is None or dto is None:
            return

        genre = resolve_genre(dto.genre_id) if dto.genre_id is not None else None

        if dto.title is not None:
            song.title = dto.title
        if genre is not None:
            song.genre = genre
        if dto.price is not None:
            song.price = dto.price
        if dto.artwork_url is not None:
            song.artwork_url = dto.artwork_url
        if dto.description is not None:
            song.description = dto.description

        record_entity_write("song", "update")

    def to_dto_list(self, songs: Optional[Iterable[Song]]) -> List[SongDTO]:
        if songs is None:
            return []
        return [self.to_dto(song) for song in songs]


__all__ = ["SongMapper"]
