import logging

LOGGER_NAME = "vibemerge"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def parse_log_level(name: str) -> int:
    # unknown names fall back to INFO
    return LOG_LEVELS.get((name or "").strip().upper(), logging.INFO)


def configure_logging(level_name: str = "INFO") -> logging.Logger:
    """
    Set up root handlers once and return the application logger.

    The returned logger is handed to every component that logs, so the
    level lives in one place instead of a module global.
    """
    level = parse_log_level(level_name)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)
    return app_logger
