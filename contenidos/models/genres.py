#!/usr/bin/env python
"""
Fixed catalogue of music genres.

Ids are stable and are what clients send on create/edit requests; rows store
the member name. The table never changes at runtime.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from contenidos.exceptions import GenreNotFoundError


def _is_id(value) -> bool:
    # bool is an int subclass; True must not resolve to id 1
    return isinstance(value, int) and not isinstance(value, bool)


class Genre(Enum):
    ROCK = (1, "Rock")
    POP = (2, "Pop")
    JAZZ = (3, "Jazz")
    BLUES = (4, "Blues")
    CLASICA = (5, "Clásica")
    REGGAE = (6, "Reggae")
    COUNTRY = (7, "Country")
    ELECTRONICA = (8, "Electrónica")
    HIP_HOP = (9, "Hip Hop")
    RNB = (10, "R&B")
    SOUL = (11, "Soul")
    FUNK = (12, "Funk")
    METAL = (13, "Metal")
    PUNK = (14, "Punk")
    INDIE = (15, "Indie")
    FOLK = (16, "Folk")
    LATINA = (17, "Latina")
    SALSA = (18, "Salsa")
    REGGAETON = (19, "Reggaeton")
    FLAMENCO = (20, "Flamenco")
    TANGO = (21, "Tango")
    BACHATA = (22, "Bachata")
    MERENGUE = (23, "Merengue")
    CUMBIA = (24, "Cumbia")
    DUBSTEP = (25, "Dubstep")
    HOUSE = (26, "House")
    TECHNO = (27, "Techno")
    TRAP = (28, "Trap")
    KPOP = (29, "K-Pop")
    ANIME = (30, "Anime")

    def __init__(self, genre_id: int, display_name: str):
        self.id = genre_id
        self.display_name = display_name

    @classmethod
    def from_id(cls, genre_id) -> "Genre":
        """Resolve a genre by numeric id; raises GenreNotFoundError if unknown."""
        if _is_id(genre_id):
            for genre in cls:
                if genre.id == genre_id:
                    return genre
        raise GenreNotFoundError(genre_id=genre_id)

    @classmethod
    def from_name(cls, name) -> "Genre":
        """Resolve a genre by display name, ignoring case."""
        if isinstance(name, str):
            wanted = name.lower()
            for genre in cls:
                if genre.display_name.lower() == wanted:
                    return genre
        raise GenreNotFoundError(name=name)

    @classmethod
    def exists(cls, genre_id) -> bool:
        return _is_id(genre_id) and any(genre.id == genre_id for genre in cls)

    @classmethod
    def all_ids(cls) -> List[int]:
        return [genre.id for genre in cls]

    @classmethod
    def all_names(cls) -> List[str]:
        return [genre.display_name for genre in cls]

    @classmethod
    def search(cls, query: str | None) -> List["Genre"]:
        """Genres whose display name contains ``query``; a blank query matches all."""
        needle = (query or "").strip().lower()
        if not needle:
            return list(cls)
        return [genre for genre in cls if needle in genre.display_name.lower()]

    def to_dto(self):
        from contenidos.models.dto import GenreDTO

        return GenreDTO(id=self.id, name=self.display_name)


__all__ = ["Genre"]
