import sys
from typing import Protocol

from loguru import logger

from meeting_webinar.config import get_webinar_environ_config


def init_logger(debug: bool | None = None) -> None:
    if debug is None:
        debug = get_webinar_environ_config().DEBUG

    logger.remove()

    if debug:
        logger_level = "DEBUG"
        logger_format = (
            "<green>{time:MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
    else:
        logger_level = "INFO"
        logger_format = (
            "{time:MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{name}:{function}:{line} | "
            "{message}"
        )
    logger.add(sys.stderr, level=logger_level, format=logger_format)


class ErrorLogger(Protocol):
    def error(self, message: str, err: BaseException) -> None: ...


class LoggerProxy:
    """Error sink handed to the webinar gateway.

    Keeps the ``error(message, err)`` call shape so callers can swap in a mock
    or another backend, while the default forwards to loguru with the
    exception (and its traceback) attached.
    """

    def error(self, message: str, err: BaseException) -> None:
        logger.opt(exception=err).error(message)
