import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler = None


def configure_logging(level: str = "INFO") -> None:
    global _handler
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    if _handler is not None:
        return

    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(_handler)

    # SQL echo is controlled by the engine, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
