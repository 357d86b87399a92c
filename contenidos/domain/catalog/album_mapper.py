#!/usr/bin/env python
"""Album entity <-> DTO conversion."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from contenidos.database.db_manager import Album, AlbumTrack
from contenidos.domain.catalog.aggregates import CommentCounter, RatingAggregator, round_rating
from contenidos.domain.catalog.genre_resolution import resolve_genre
from contenidos.models.dto import (
    AlbumDetailDTO,
    AlbumDTO,
    AlbumTrackDTO,
    CreateAlbumDTO,
    EditAlbumDTO,
    SongSummaryDTO,
)
from contenidos.observability.metrics import record_entity_write, record_mapping


logger = logging.getLogger(__name__)


class AlbumMapper:
    def __init__(self, rating_aggregator: RatingAggregator, comment_counter: CommentCounter):
        self.rating_aggregator = rating_aggregator
        self.comment_counter = comment_counter

    def _scalar_fields(self, album: Album) -> dict:
        average = self.rating_aggregator.album_average(album.id)
        total_comments = self.comment_counter.album_count(album.id)
        return {
            "id": album.id,
            "title": album.title,
            "artist_id": album.artist_id,
            "genre": album.genre.display_name,
            "price": album.price,
            "artwork_url": album.artwork_url,
            "average_rating": round_rating(average),
            "total_comments": total_comments or 0,
            "total_tracks": album.total_tracks,
            "total_duration_seconds": album.total_duration_seconds,
            "total_play_count": album.total_play_count,
            "published_at": album.published_at,
            "description": album.description,
        }

    def to_dto(self, album: Optional[Album]) -> Optional[AlbumDTO]:
        if album is None:
            return None

        first_track = None
        if album.tracks:
            song = album.tracks[0].song
            first_track = SongSummaryDTO(id=song.id, title=song.title, artwork_url=song.artwork_url)

        record_mapping("album", "basic")
        return AlbumDTO(**self._scalar_fields(album), first_track=first_track)

    def to_detail_dto(self, album: Optional[Album]) -> Optional[AlbumDetailDTO]:
        if album is None:
            return None

        track_list = [self.to_album_track_dto(entry) for entry in (album.tracks or [])]

        record_mapping("album", "detail")
        logger.debug("Mapped album %s with %d track(s)", album.id, len(track_list))
        return AlbumDetailDTO(**self._scalar_fields(album), track_list=track_list)

    def to_album_track_dto(self, entry: Optional[AlbumTrack]) -> Optional[AlbumTrackDTO]:
        if entry is None:
            return None

        song = entry.song
        return AlbumTrackDTO(
            id=song.id,
            title=song.title,
            duration_seconds=song.duration_seconds,
            track_number=entry.track_number,
            artwork_url=song.artwork_url,
            audio_url=song.audio_url,
            price=song.price,
            play_count=song.play_count,
        )

    def to_entity(self, dto: Optional[CreateAlbumDTO], artist_id: int) -> Optional[Album]:
        if dto is None:
            return None

        album = Album(
            title=dto.title,
            artist_id=artist_id,
            genre=resolve_genre(dto.genre_id),
            price=dto.price,
            artwork_url=dto.artwork_url,
            description=dto.description,
        )
        record_entity_write("album", "create")
        return album

    def update_entity(self, album: Optional[Album], dto: Optional[EditAlbumDTO]) -> None:
        if album is None or dto is None:
            return

        # resolve first: an unknown genre must not leave a half-applied edit
        genre = resolve_genre(dto.genre_id) if dto.genre_id is not None else None

        if dto.title is not None:
            album.title = dto.title
        if genre is not None:
            album.genre = genre
        if dto.price is not None:
            album.price = dto.price
        if dto.artwork_url is not None:
            album.artwork_url = dto.artwork_url
        if dto.description is not None:
            album.description = dto.description

        record_entity_write("album", "update")

    def to_dto_list(self, albums: Optional[Iterable[Album]]) -> List[AlbumDTO]:
        if albums is None:
            return []
        return [self.to_dto(album) for album in albums]


__all__ = ["AlbumMapper"]
