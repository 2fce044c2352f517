# logging_config.py
"""""
Logger setup for the calcpad package.

Every module logs through logging.getLogger(__name__), so one handler set on the
"calcpad" logger covers the whole package. Calling setup_logging() again (e.g. after
the settings dialog restarts the window) replaces the handlers instead of stacking them.
"""""

import logging
import sys


LOGGER_NAME = "calcpad"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level=logging.INFO, log_file=None):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # --- 1. Drop handlers from an earlier call ---
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()

    # --- 2. Console always, log file only when a path is given ---
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    # --- 3. Same level and format everywhere ---
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging initialized.")
    return logger
