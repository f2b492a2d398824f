import logging
from logging.handlers import RotatingFileHandler

from env import LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(pathname)s:%(lineno)d"

logger = logging.getLogger("transparency_api")


def configure_logging(level: str = LOG_LEVEL, log_file: str = LOG_FILE) -> logging.Logger:
    """Attach the file and console handlers once.

    The file gets everything at ``level`` and above (rotated at 5 MB, 3 backups),
    the console only errors. An empty ``log_file`` keeps logging console-only.
    """
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.DEBUG))
    formatter = logging.Formatter(LOG_FORMAT)

    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
        file_handler.setLevel(logger.level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    return logger


configure_logging()


# stacklevel=2 so pathname/lineno point at the caller, not this module
def log_debug(message: str):
    logger.debug(message, stacklevel=2)


def log_info(message: str):
    logger.info(message, stacklevel=2)


def log_warning(message: str):
    logger.warning(message, stacklevel=2)


def log_error(message: str, exc: Exception = None):
    logger.error(message, exc_info=exc, stacklevel=2)


def log_critical(message: str):
    logger.critical(message, stacklevel=2)


def log_request(method: str, url: str, status_code: int, duration_ms: float):
    """One line per handled request; 5xx responses are logged as warnings."""
    message = f"Request: {method} {url} -> {status_code} ({duration_ms:.1f} ms)"
    if status_code >= 500:
        logger.warning(message, stacklevel=2)
    else:
        logger.info(message, stacklevel=2)
