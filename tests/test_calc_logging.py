"""Tests for logging configuration."""

import logging

from calc_logging import ROOT_LOGGER, configure_logging, get_logger


def test_get_logger_returns_child_of_root():
    logger = get_logger("test.module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == f"{ROOT_LOGGER}.test.module"


def test_get_logger_same_name_same_logger():
    assert get_logger("test.cached") is get_logger("test.cached")


def test_root_has_single_handler_after_repeated_setup():
    configure_logging()
    configure_logging()
    get_logger("test.handler")
    assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1


def test_children_propagate_to_root_handler():
    logger = get_logger("test.propagate")
    assert not logger.handlers
    assert logger.propagate


def test_format_includes_name():
    configure_logging()
    fmt = logging.getLogger(ROOT_LOGGER).handlers[0].formatter._fmt
    assert "%(name)s" in fmt


def test_configure_logging_sets_level_for_all_children():
    try:
        configure_logging(logging.DEBUG)
        assert get_logger("calcs").isEnabledFor(logging.DEBUG)
        assert logging.getLogger(ROOT_LOGGER).handlers[0].level == logging.DEBUG
    finally:
        configure_logging(logging.INFO)
    assert not get_logger("calcs").isEnabledFor(logging.DEBUG)


def test_core_and_app_loggers_share_root():
    import mech_calc_app
    import mech_calcs
    assert mech_calcs.log.name == "mechcalc.calcs"
    assert mech_calc_app.log.name == "mechcalc.app"
