"""Entry point for serving the Flashcards API.

Host, port, database location and log level are read from the
environment (see ``flashcards_api/app/core/config.py``), for example::

    DATABASE_URL=/var/lib/flashcards.db PORT=9000 python run.py
"""
import logging

from uvicorn import Config, Server

from flashcards_api.app.core.config import settings
from flashcards_api.app.main import app


def main() -> None:
    """Start the API using Uvicorn."""
    # log_config=None keeps the handlers installed by setup_logging.
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_config=None, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server listening on %s:%s", settings.host, settings.port)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
