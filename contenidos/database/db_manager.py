# contenidos/database/db_manager.py
from flask_sqlalchemy import SQLAlchemy
import os
import logging
from datetime import datetime, timezone
from sqlalchemy import ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.engine import make_url
from sqlalchemy.orm import relationship

from contenidos.models.genres import Genre

# Initialize the SQLAlchemy object
db = SQLAlchemy()
logger = logging.getLogger(__name__)


class ContentType:
    SONG = 'song'
    ALBUM = 'album'

    ALL = (SONG, ALBUM)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _genre_column():
    # Stored by member name (e.g. 'HIP_HOP'), never by display name
    return db.Column(db.Enum(Genre, native_enum=False, length=50, validate_strings=True), nullable=False, index=True)


class Song(db.Model):
    __tablename__ = 'songs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    artist_id = db.Column(db.Integer, nullable=False, index=True)
    genre = _genre_column()
    price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False, index=True)
    duration_seconds = db.Column(db.Integer, nullable=False)
    artwork_url = db.Column(db.Text, nullable=True)
    audio_url = db.Column(db.Text, nullable=True)
    play_count = db.Column(db.Integer, nullable=False, default=0, index=True)
    published_at = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)
    description = db.Column(db.Text, nullable=True)

    # Insertion order of the join rows
    albums = relationship(
        'AlbumTrack',
        back_populates='song',
        order_by='AlbumTrack.id',
        cascade='all, delete-orphan',
    )

    def increment_play_count(self) -> None:
        self.play_count = (self.play_count or 0) + 1

    def is_free(self) -> bool:
        return self.price is not None and self.price == 0

    def belongs_to_artist(self, artist_id) -> bool:
        return self.artist_id is not None and self.artist_id == artist_id

    def __repr__(self):
        return f'<Song {self.id}: {self.title}>'


class Album(db.Model):
    __tablename__ = 'albums'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    artist_id = db.Column(db.Integer, nullable=False, index=True)
    genre = _genre_column()
    price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False, index=True)
    artwork_url = db.Column(db.Text, nullable=True)
    published_at = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)
    description = db.Column(db.Text, nullable=True)

    tracks = relationship(
        'AlbumTrack',
        back_populates='album',
        order_by='AlbumTrack.track_number',
        cascade='all, delete-orphan',
    )

    @property
    def total_tracks(self) -> int:
        return len(self.tracks or [])

    @property
    def total_duration_seconds(self) -> int:
        return sum((t.song.duration_seconds or 0) for t in (self.tracks or []) if t.song is not None)

    @property
    def total_play_count(self) -> int:
        return sum((t.song.play_count or 0) for t in (self.tracks or []) if t.song is not None)

    def is_free(self) -> bool:
        return self.price is not None and self.price == 0

    def contains_song(self, song_id) -> bool:
        return any(t.song is not None and t.song.id == song_id for t in (self.tracks or []))

    def has_track_number(self, track_number) -> bool:
        return any(t.track_number == track_number for t in (self.tracks or []))

    def add_song(self, song: 'Song', track_number: int) -> 'AlbumTrack':
        entry = AlbumTrack(album=self, song=song, track_number=track_number)
        # back_populates already appended it to self.tracks
        return entry

    def belongs_to_artist(self, artist_id) -> bool:
        return self.artist_id is not None and self.artist_id == artist_id

    def __repr__(self):
        return f'<Album {self.id}: {self.title}>'


class AlbumTrack(db.Model):
    __tablename__ = 'album_tracks'

    id = db.Column(db.Integer, primary_key=True)
    album_id = db.Column(db.Integer, ForeignKey('albums.id', ondelete='CASCADE'), nullable=False, index=True)
    song_id = db.Column(db.Integer, ForeignKey('songs.id', ondelete='CASCADE'), nullable=False, index=True)
    track_number = db.Column(db.Integer, nullable=False, index=True)
    added_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    album = relationship('Album', back_populates='tracks')
    song = relationship('Song', back_populates='albums')

    __table_args__ = (
        UniqueConstraint('album_id', 'song_id', name='uq_album_song'),
        UniqueConstraint('album_id', 'track_number', name='uq_album_track_number'),
    )

    def __repr__(self):
        return f'<AlbumTrack album={self.album_id} song={self.song_id} #{self.track_number}>'


class Rating(db.Model):
    __tablename__ = 'ratings'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    user_name = db.Column(db.String(100), nullable=False)
    content_type = db.Column(db.String(20), nullable=False, index=True)
    song_id = db.Column(db.Integer, ForeignKey('songs.id', ondelete='CASCADE'), nullable=True, index=True)
    album_id = db.Column(db.Integer, ForeignKey('albums.id', ondelete='CASCADE'), nullable=True, index=True)
    value = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)
    edited_at = db.Column(db.DateTime, nullable=True, onupdate=_utcnow)

    song = relationship('Song')
    album = relationship('Album')

    __table_args__ = (
        UniqueConstraint('user_id', 'song_id', name='uq_rating_user_song'),
        UniqueConstraint('user_id', 'album_id', name='uq_rating_user_album'),
        CheckConstraint("content_type IN ('song', 'album')", name='ck_ratings_content_type'),
        CheckConstraint('value BETWEEN 1 AND 5', name='ck_ratings_value_range'),
    )

    def is_valid(self) -> bool:
        targets_one = (
            (self.song_id is not None or self.song is not None)
            and self.album_id is None and self.album is None
            and self.content_type == ContentType.SONG
        ) or (
            (self.album_id is not None or self.album is not None)
            and self.song_id is None and self.song is None
            and self.content_type == ContentType.ALBUM
        )
        return targets_one and self.value is not None and 1 <= self.value <= 5

    def was_edited(self) -> bool:
        return self.edited_at is not None


class Comment(db.Model):
    __tablename__ = 'comments'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    user_name = db.Column(db.String(100), nullable=False)
    content_type = db.Column(db.String(20), nullable=False, index=True)
    song_id = db.Column(db.Integer, ForeignKey('songs.id', ondelete='CASCADE'), nullable=True, index=True)
    album_id = db.Column(db.Integer, ForeignKey('albums.id', ondelete='CASCADE'), nullable=True, index=True)
    content = db.Column(db.String(1000), nullable=False)
    published_at = db.Column(db.DateTime, nullable=False, default=_utcnow, index=True)
    edited_at = db.Column(db.DateTime, nullable=True, onupdate=_utcnow)

    song = relationship('Song')
    album = relationship('Album')

    __table_args__ = (
        CheckConstraint("content_type IN ('song', 'album')", name='ck_comments_content_type'),
    )

    def is_valid(self) -> bool:
        return (
            (self.song_id is not None or self.song is not None)
            and self.album_id is None and self.album is None
            and self.content_type == ContentType.SONG
        ) or (
            (self.album_id is not None or self.album is not None)
            and self.song_id is None and self.song is None
            and self.content_type == ContentType.ALBUM
        )

    def was_edited(self) -> bool:
        return self.edited_at is not None


def initialize_database(app):
    """
    Initializes the SQLAlchemy extension with the Flask app instance
    and creates all database tables if they don't already exist.
    """
    db.init_app(app)
    # Ensure the instance folder exists for SQLite database file
    instance_path = app.instance_path
    if not os.path.exists(instance_path):
        os.makedirs(instance_path)
        logger.info("Created instance folder: %s", instance_path)

    # Ensure the directory for the configured SQLite file exists
    uri = app.config.get('SQLALCHEMY_DATABASE_URI')
    if uri:
        url = make_url(uri)
        # Only handle file-based SQLite (not :memory:)
        if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
            db_dir = os.path.dirname(url.database)
            if db_dir and not os.path.exists(db_dir):
                os.makedirs(db_dir, exist_ok=True)
                logger.info("Created SQLite DB directory: %s", db_dir)

    # Create database tables within the application context
    with app.app_context():
        db.create_all()
        logger.info("Database tables created or already exist.")
