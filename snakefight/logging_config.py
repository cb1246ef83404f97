import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Logger for per-request access lines
ACCESS_LOGGER = "snake-fight"


def setup_logging(level=None):
    """
    Configure console logging for the server.

    :param level: Level name or number; defaults to SNAKEFIGHT_LOG_LEVEL, then INFO
    :return: The access logger
    """
    level = level or os.getenv("SNAKEFIGHT_LOG_LEVEL") or logging.INFO
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger()
    root.setLevel(level)

    # Replace our own handler on repeat calls, leave others alone
    for handler in list(root.handlers):
        if getattr(handler, "_snakefight", False):
            root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler._snakefight = True
    root.addHandler(console_handler)

    return logging.getLogger(ACCESS_LOGGER)
