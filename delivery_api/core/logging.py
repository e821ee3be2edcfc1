import logging

from delivery_api.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    if not settings.DATABASE_ECHO:
        logging.getLogger("sqlalchemy.engine").disabled = True
