import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'contenidos' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import factories as test_factories
from tests.support import stubs as test_stubs


@pytest.fixture
def sqlite_uri(tmp_path_factory):
    """Per-test sqlite file so tests never share rows."""
    db_dir = tmp_path_factory.mktemp("db")
    db_path = Path(db_dir) / "test.sqlite"
    return f"sqlite:///{db_path.as_posix()}"


@pytest.fixture
def app(sqlite_uri, tmp_path):
    from config import Config
    import app as app_module

    class TestConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = sqlite_uri
        ENABLE_STRUCTURED_LOGS = False
        OTEL_EXPORTER_OTLP_ENDPOINT = None

    application = app_module.create_app(TestConfig, instance_path=str(tmp_path / "instance"))
    yield application


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def db_session(app_context):
    from contenidos.database.db_manager import db

    test_factories.set_session(db.session)
    try:
        yield db.session
    finally:
        db.session.rollback()
        db.session.remove()
        test_factories.reset_session()


@pytest.fixture
def factories(db_session):
    yield test_factories


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def rating_stub():
    return test_stubs.RatingAggregatorStub()


@pytest.fixture
def comment_stub():
    return test_stubs.CommentCounterStub()


@pytest.fixture
def song_mapper(rating_stub, comment_stub):
    from contenidos.domain.catalog import SongMapper

    return SongMapper(rating_stub, comment_stub)


@pytest.fixture
def album_mapper(rating_stub, comment_stub):
    from contenidos.domain.catalog import AlbumMapper

    return AlbumMapper(rating_stub, comment_stub)
