"""Logging configuration for the quiz."""

import logging
import logging.handlers

from config import LoggingSettings


def setup_logging(settings: LoggingSettings) -> None:
    """Set up logging configuration.

    Logs go to stderr at the configured level. When a log file is set, a
    rotating file handler is added as well.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.level.upper())

    # Drop handlers from an earlier call
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(settings.format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            settings.file,
            maxBytes=1024 * 1024,  # 1MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.debug("Logging configured at %s", settings.level)
