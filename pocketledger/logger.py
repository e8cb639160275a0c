"""Logging configuration for pocketledger.

The package logger writes to the console; Flask's own ``app.logger`` is left alone.
"""

import logging

LOGGER_NAME = "pocketledger"


def setup_logging(app) -> logging.Logger:
    """Configure the package logger from ``app.config["LOG_LEVEL"]``.

    Args:
        app: Flask application whose config holds the log level.

    Returns:
        Configured logger instance.
    """
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # create_app may run many times in one process (tests)
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Get the package logger, or one of its children.

    Args:
        name: Optional child name, e.g. ``"services.categories"``.

    Returns:
        The requested logger.
    """
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
