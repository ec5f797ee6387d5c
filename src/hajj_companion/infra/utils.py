import logging

from rich.logging import RichHandler

LOGGER_NAME = "hajj_companion"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configures and returns the package logger with Rich formatting.

    Calling it again only updates the level.
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level.upper())
    return package_logger
