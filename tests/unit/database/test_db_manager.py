import os
from flask import Flask
import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, StatementError

from contenidos.models.genres import Genre


@pytest.mark.unit
def test_initialize_database_in_memory_only_creates_instance_dir(tmp_path, monkeypatch):
    from contenidos.database.db_manager import initialize_database

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    instance_dir = tmp_path / "instance"
    app.instance_path = str(instance_dir)

    calls = []
    real_makedirs = os.makedirs

    def tracing_makedirs(path, *args, **kwargs):
        calls.append(os.path.abspath(path))
        return real_makedirs(path, *args, **kwargs)

    monkeypatch.setattr(os, "makedirs", tracing_makedirs)

    initialize_database(app)

    assert instance_dir.exists()
    assert len(calls) == 1
    assert os.path.abspath(str(instance_dir)) in calls


@pytest.mark.unit
def test_initialize_database_creates_sqlite_directory(tmp_path):
    target_dir = tmp_path / "nested" / "dbdir"
    db_file = target_dir / "catalog.db"
    uri = f"sqlite:///{db_file}".replace("\\", "/")

    from contenidos.database.db_manager import Song, db, initialize_database

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = uri
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.instance_path = str(tmp_path / "instance")

    initialize_database(app)

    assert target_dir.exists()
    with app.app_context():
        assert db.session.query(Song).count() == 0


@pytest.mark.unit
def test_genre_is_stored_by_member_name(db_session, factories):
    song = factories.SongFactory(genre=Genre.HIP_HOP)
    db_session.commit()

    raw = db_session.execute(text("SELECT genre FROM songs WHERE id = :id"), {"id": song.id}).scalar()
    assert raw == "HIP_HOP"

    db_session.expire_all()
    assert song.genre is Genre.HIP_HOP


@pytest.mark.unit
def test_song_defaults_and_helpers(db_session, factories):
    song = factories.SongFactory(price=0, artist_id=9)
    db_session.commit()

    assert song.play_count == 0
    assert song.published_at is not None
    assert song.is_free()
    assert song.belongs_to_artist(9)
    assert not song.belongs_to_artist(10)

    song.increment_play_count()
    song.increment_play_count()
    db_session.commit()
    assert song.play_count == 2


@pytest.mark.unit
def test_album_tracks_ordered_by_track_number_and_totals(db_session, factories):
    album = factories.AlbumFactory()
    third = factories.SongFactory(duration_seconds=300, play_count=1)
    first = factories.SongFactory(duration_seconds=120, play_count=10)
    db_session.add_all([album.add_song(third, 3), album.add_song(first, 1)])
    db_session.commit()

    db_session.expire_all()
    assert [t.track_number for t in album.tracks] == [1, 3]
    assert album.tracks[0].song.id == first.id
    assert album.total_tracks == 2
    assert album.total_duration_seconds == 420
    assert album.total_play_count == 11
    assert album.contains_song(third.id)
    assert album.has_track_number(3)
    assert not album.has_track_number(2)

    assert [entry.album.id for entry in first.albums] == [album.id]


@pytest.mark.unit
def test_song_in_several_albums_keeps_insertion_order(db_session, factories):
    song = factories.SongFactory()
    original = factories.AlbumFactory(title="Original")
    compilation = factories.AlbumFactory(title="Compilation")
    db_session.add(original.add_song(song, 4))
    db_session.flush()
    db_session.add(compilation.add_song(song, 1))
    db_session.commit()

    db_session.expire_all()
    assert [entry.album.title for entry in song.albums] == ["Original", "Compilation"]


@pytest.mark.unit
def test_album_rejects_duplicate_song(db_session, factories):
    entry = factories.AlbumTrackFactory(track_number=1)
    db_session.commit()

    db_session.add(factories.AlbumTrackFactory.build(album=entry.album, song=entry.song, track_number=2))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


@pytest.mark.unit
def test_album_rejects_duplicate_track_number(db_session, factories):
    entry = factories.AlbumTrackFactory(track_number=1)
    db_session.commit()

    db_session.add(factories.AlbumTrackFactory.build(album=entry.album, track_number=1))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


@pytest.mark.unit
def test_one_rating_per_user_and_song(db_session, factories):
    song = factories.SongFactory()
    factories.RatingFactory(song=song, user_id=1, value=5)
    db_session.commit()

    db_session.add(factories.RatingFactory.build(song=song, user_id=1, value=3))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


@pytest.mark.unit
def test_rating_and_comment_validity(db_session, factories):
    from contenidos.database.db_manager import Comment, ContentType, Rating

    song = factories.SongFactory()
    album = factories.AlbumFactory()
    db_session.commit()

    assert Rating(song=song, content_type=ContentType.SONG, value=5).is_valid()
    assert not Rating(song=song, content_type=ContentType.SONG, value=6).is_valid()
    assert not Rating(song=song, content_type=ContentType.ALBUM, value=3).is_valid()
    assert not Rating(song=song, album=album, content_type=ContentType.SONG, value=3).is_valid()
    assert Comment(album=album, content_type=ContentType.ALBUM, content="ok").is_valid()
    assert not Comment(content_type=ContentType.SONG, content="orphan").is_valid()

    rating = factories.RatingFactory(song=song, value=2)
    db_session.commit()
    assert not rating.was_edited()
    rating.value = 3
    db_session.commit()
    assert rating.was_edited()


@pytest.mark.unit
def test_content_type_is_constrained(db_session, factories):
    song = factories.SongFactory()
    db_session.commit()

    db_session.add(factories.CommentFactory.build(song=song, content_type="playlist"))
    with pytest.raises((IntegrityError, StatementError)):
        db_session.commit()
    db_session.rollback()


@pytest.mark.unit
@pytest.mark.parametrize("value", [0, 6])
def test_rating_value_is_constrained(db_session, factories, value):
    song = factories.SongFactory()
    db_session.commit()

    db_session.add(factories.RatingFactory.build(song=song, value=value))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()
