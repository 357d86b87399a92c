import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from flask import Flask, g, request

from config import Config
from contenidos.database.db_manager import initialize_database
from contenidos.domain.catalog import (
    AlbumMapper,
    DefaultCommentCounter,
    DefaultRatingAggregator,
    SongMapper,
)
from contenidos.exceptions import register_error_handlers
from contenidos.interfaces.http.routes import health_bp
from contenidos.observability import configure_structured_logging, init_tracing, metrics_blueprint


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def create_app(config_object=Config, instance_path=None):
    app = Flask(__name__, instance_path=instance_path)
    app.config.from_object(config_object)
    configure_structured_logging(app)
    init_tracing(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    initialize_database(app)
    register_error_handlers(app)

    # Mappers are stateless; one pair serves every request
    rating_aggregator = DefaultRatingAggregator()
    comment_counter = DefaultCommentCounter()
    app.extensions['song_mapper'] = SongMapper(rating_aggregator, comment_counter)
    app.extensions['album_mapper'] = AlbumMapper(rating_aggregator, comment_counter)
    app.logger.info("Catalog mappers ready")

    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    return app


if __name__ == '__main__':
    debug_mode = bool(Config.DEBUG)
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'contenidos', 'log')
    # With the reloader, only the child process owns the log file
    if not debug_mode or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    app = create_app()
    app.run(debug=debug_mode, port=Config.PORT)
