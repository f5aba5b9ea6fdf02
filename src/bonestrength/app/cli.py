import os
import sys
from aiohttp import web
import logging
from logging.config import dictConfig
import json

from pydantic import ValidationError

logger = logging.getLogger(__name__)


def configure_logging():
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig()
    logging.getLogger().setLevel(logging.DEBUG)


def load_settings():
    from bonestrength.app.config import Settings

    try:
        return Settings()  # type: ignore
    except ValidationError as e:
        missing = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        logger.error("Invalid configuration, check: %s", ", ".join(missing))
        sys.exit(1)


def invoke():
    configure_logging()

    settings = load_settings()

    from bonestrength.app.server import start_web_server

    web.run_app(start_web_server(settings), port=settings.http_port)


if __name__ == "__main__":
    invoke()
