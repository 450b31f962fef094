"""
Logging for the calculator toolkit.

All loggers hang off one "mechcalc" root so the core and the Streamlit app
share a single stdout handler; configure_logging() changes the level for both.
"""

import logging
import sys

ROOT_LOGGER = "mechcalc"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach the stdout handler to the root logger (once) and set its level.

    Streamlit re-executes the app script on every interaction, so this must be
    safe to call repeatedly without stacking handlers.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(handler)
    for handler in root.handlers:
        handler.setLevel(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Child logger under the toolkit root, e.g. get_logger("calcs") -> 'mechcalc.calcs'."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        configure_logging()
    return root.getChild(name)
