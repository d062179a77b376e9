"""Process-wide logging setup."""

import logging

from pos.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger from settings.

    Modules keep their own ``logging.getLogger(__name__)``; this only sets the
    level and format once at startup.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # SQL echo is driven by DEBUG through the engine, keep the rest quiet
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
