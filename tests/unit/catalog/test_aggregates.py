import pytest

from contenidos.database.db_manager import ContentType
from contenidos.domain.catalog import DefaultCommentCounter, DefaultRatingAggregator, round_rating


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [(None, None), (4, 4.0), (3.456, 3.46), (3.444, 3.44), (4.666, 4.67), (2.125, 2.13)],
)
def test_round_rating(raw, expected):
    assert round_rating(raw) == expected


@pytest.mark.unit
def test_song_average_over_stored_ratings(db_session, factories):
    song = factories.SongFactory()
    other = factories.SongFactory()
    for value in (5, 4, 4):
        factories.RatingFactory(song=song, value=value)
    factories.RatingFactory(song=other, value=1)
    db_session.commit()

    aggregator = DefaultRatingAggregator()

    assert aggregator.song_average(song.id) == pytest.approx(13 / 3)
    assert aggregator.song_average(other.id) == 1.0


@pytest.mark.unit
def test_average_is_none_without_ratings(db_session, factories):
    song = factories.SongFactory()
    album = factories.AlbumFactory()
    db_session.commit()

    aggregator = DefaultRatingAggregator()

    assert aggregator.song_average(song.id) is None
    assert aggregator.album_average(album.id) is None


@pytest.mark.unit
def test_album_average_ignores_song_ratings(db_session, factories):
    entry = factories.AlbumTrackFactory()
    factories.RatingFactory(album=entry.album, content_type=ContentType.ALBUM, value=2)
    factories.RatingFactory(album=entry.album, content_type=ContentType.ALBUM, value=3)
    factories.RatingFactory(song=entry.song, value=5)
    db_session.commit()

    assert DefaultRatingAggregator().album_average(entry.album.id) == 2.5


@pytest.mark.unit
def test_comment_counts(db_session, factories):
    song = factories.SongFactory()
    album = factories.AlbumFactory()
    factories.CommentFactory(song=song)
    factories.CommentFactory(song=song)
    factories.CommentFactory(album=album, content_type=ContentType.ALBUM)
    db_session.commit()

    counter = DefaultCommentCounter()

    assert counter.song_count(song.id) == 2
    assert counter.album_count(album.id) == 1
    assert counter.song_count(song.id + 1000) == 0


@pytest.mark.unit
def test_mappers_registered_on_app_use_the_database(db_session, factories, app_context):
    song = factories.SongFactory(title="Cancion Test")
    factories.RatingFactory(song=song, value=4)
    factories.CommentFactory(song=song)
    factories.CommentFactory(song=song)
    db_session.commit()

    dto = app_context.extensions["song_mapper"].to_dto(song)

    assert dto.title == "Cancion Test"
    assert dto.genre == "Pop"
    assert dto.average_rating == 4.0
    assert dto.total_comments == 2
