import logging
import sys

from microgrid_ledger.settings import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def set_logger_and_children_level(parent_logger: logging.Logger, level: int) -> None:
    """Set the level of a logger and of every logger registered beneath it."""
    parent_logger.setLevel(level)
    for handler in parent_logger.handlers:
        handler.setLevel(level)

    if not parent_logger.name or parent_logger.name == "root":
        return

    prefix = parent_logger.name + "."
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(prefix):
            logging.getLogger(name).setLevel(level)


def configure_logger(name: str = "microgrid_ledger") -> logging.Logger:
    app_logger = logging.getLogger(name)
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)
    app_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    return app_logger


logger = configure_logger()
