#!/usr/bin/env python
"""
Pydantic DTOs for the catalog API.

Attributes are snake_case in Python; the JSON wire names are the camelCase
aliases (dump with ``by_alias=True``). Every model accepts either form.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

# Artwork and audio live on the media CDN
MEDIA_URL_PATTERN = r"^https://res\.cloudinary\.com/.*"


class _CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- Response shapes ---------------------------------------------------------


class AlbumSummaryDTO(_CatalogModel):
    """Album reference embedded in a song's basic view."""

    id: int = Field(alias="idAlbum")
    title: str = Field(alias="tituloAlbum")
    artwork_url: Optional[str] = Field(default=None, alias="urlPortada")


class AlbumSummaryWithTrackDTO(AlbumSummaryDTO):
    """Album reference plus the song's position inside that album."""

    track_number: int = Field(alias="numeroPista")


class SongSummaryDTO(_CatalogModel):
    """Song reference embedded in an album's basic view."""

    id: int = Field(alias="idCancion")
    title: str = Field(alias="tituloCancion")
    artwork_url: Optional[str] = Field(default=None, alias="urlPortada")


class AlbumTrackDTO(_CatalogModel):
    id: int = Field(alias="idCancion")
    title: str = Field(alias="tituloCancion")
    duration_seconds: Optional[int] = Field(default=None, alias="duracionSegundos")
    track_number: int = Field(alias="trackNumber")
    artwork_url: Optional[str] = Field(default=None, alias="urlPortada")
    audio_url: Optional[str] = Field(default=None, alias="urlAudio")
    price: Optional[float] = Field(default=None, alias="precioCancion")
    play_count: Optional[int] = Field(default=None, alias="reproducciones")


class _SongFields(_CatalogModel):
    id: Optional[int] = Field(default=None, alias="idCancion")
    title: str = Field(alias="tituloCancion")
    artist_id: int = Field(alias="idArtista")
    genre: str = Field(alias="genero")
    price: Optional[float] = Field(default=None, alias="precioCancion")
    duration_seconds: Optional[int] = Field(default=None, alias="duracionSegundos")
    artwork_url: Optional[str] = Field(default=None, alias="urlPortada")
    audio_url: Optional[str] = Field(default=None, alias="urlAudio")
    play_count: int = Field(default=0, alias="reproducciones")
    average_rating: Optional[float] = Field(default=None, alias="valoracionMedia")
    total_comments: int = Field(default=0, alias="totalComentarios")
    published_at: Optional[datetime] = Field(default=None, alias="fechaPublicacion")
    description: Optional[str] = Field(default=None, alias="descripcion")


class SongDTO(_SongFields):
    album: Optional[AlbumSummaryDTO] = None


class SongDetailDTO(_SongFields):
    albums: List[AlbumSummaryWithTrackDTO] = Field(default_factory=list, alias="albumes")


class _AlbumFields(_CatalogModel):
    id: Optional[int] = Field(default=None, alias="idAlbum")
    title: str = Field(alias="tituloAlbum")
    artist_id: int = Field(alias="idArtista")
    genre: str = Field(alias="genero")
    price: Optional[float] = Field(default=None, alias="precioAlbum")
    artwork_url: Optional[str] = Field(default=None, alias="urlPortada")
    average_rating: Optional[float] = Field(default=None, alias="valoracionMedia")
    total_comments: int = Field(default=0, alias="totalComentarios")
    total_tracks: int = Field(default=0, alias="totalCanciones")
    total_duration_seconds: int = Field(default=0, alias="duracionTotalSegundos")
    total_play_count: int = Field(default=0, alias="totalPlayCount")
    published_at: Optional[datetime] = Field(default=None, alias="fechaPublicacion")
    description: Optional[str] = Field(default=None, alias="descripcion")


class AlbumDTO(_AlbumFields):
    first_track: Optional[SongSummaryDTO] = Field(default=None, alias="primeraCancion")


class AlbumDetailDTO(_AlbumFields):
    track_list: List[AlbumTrackDTO] = Field(default_factory=list, alias="trackList")


class GenreDTO(_CatalogModel):
    id: int = Field(alias="idGenero")
    name: str = Field(alias="nombreGenero")


# --- Requests ----------------------------------------------------------------


def _reject_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class CreateSongDTO(_CatalogModel):
    title: str = Field(alias="tituloCancion", max_length=200)
    genre_id: StrictInt = Field(alias="idGenero")
    price: float = Field(alias="precioCancion", ge=0, le=999.99)
    duration_seconds: int = Field(alias="duracionSegundos", ge=1, le=7200)
    artwork_url: str = Field(alias="urlPortada", max_length=500, pattern=MEDIA_URL_PATTERN)
    audio_url: str = Field(alias="urlAudio", max_length=500, pattern=MEDIA_URL_PATTERN)
    description: Optional[str] = Field(default=None, alias="descripcion", max_length=1000)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _reject_blank(value)


class CreateAlbumDTO(_CatalogModel):
    title: str = Field(alias="tituloAlbum", max_length=200)
    genre_id: StrictInt = Field(alias="idGenero")
    price: float = Field(alias="precioAlbum", ge=0, le=9999.99)
    artwork_url: str = Field(alias="urlPortada", max_length=500, pattern=MEDIA_URL_PATTERN)
    description: Optional[str] = Field(default=None, alias="descripcion", max_length=2000)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _reject_blank(value)


class EditSongDTO(_CatalogModel):
    """Partial song update; ``None`` means leave the field untouched."""

    title: Optional[str] = Field(default=None, alias="tituloCancion", max_length=200)
    genre_id: Optional[StrictInt] = Field(default=None, alias="idGenero")
    price: Optional[float] = Field(default=None, alias="precioCancion", ge=0, le=999.99)
    artwork_url: Optional[str] = Field(
        default=None, alias="urlPortada", max_length=500, pattern=MEDIA_URL_PATTERN
    )
    description: Optional[str] = Field(default=None, alias="descripcion", max_length=1000)


class EditAlbumDTO(_CatalogModel):
    """Partial album update; ``None`` means leave the field untouched."""

    title: Optional[str] = Field(default=None, alias="tituloAlbum", max_length=200)
    genre_id: Optional[StrictInt] = Field(default=None, alias="idGenero")
    price: Optional[float] = Field(default=None, alias="precioAlbum", ge=0, le=9999.99)
    artwork_url: Optional[str] = Field(
        default=None, alias="urlPortada", max_length=500, pattern=MEDIA_URL_PATTERN
    )
    description: Optional[str] = Field(default=None, alias="descripcion", max_length=2000)


__all__ = [
    "MEDIA_URL_PATTERN",
    "AlbumSummaryDTO",
    "AlbumSummaryWithTrackDTO",
    "SongSummaryDTO",
    "AlbumTrackDTO",
    "SongDTO",
    "SongDetailDTO",
    "AlbumDTO",
    "AlbumDetailDTO",
    "GenreDTO",
    "CreateSongDTO",
    "CreateAlbumDTO",
    "EditSongDTO",
    "EditAlbumDTO",
]
