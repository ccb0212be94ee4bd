import logging

import pytest

from sitekit.log import InvalidLogLevelError, interpolate, log_message


def test_log_message_interpolates_context(caplog) -> None:
    logger = logging.getLogger("sitekit.test.log")
    with caplog.at_level(logging.DEBUG, logger="sitekit.test.log"):
        emitted = log_message("error", "user {id} failed {action}", {"id": 7, "action": "login"}, logger=logger)

    assert emitted is True
    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "user 7 failed login"


def test_log_levels_map_onto_logging(caplog) -> None:
    logger = logging.getLogger("sitekit.test.levels")
    with caplog.at_level(logging.DEBUG, logger="sitekit.test.levels"):
        log_message("EMERGENCY", "down", logger=logger)
        log_message("notice", "heads up", logger=logger)

    assert [record.levelno for record in caplog.records[-2:]] == [logging.CRITICAL, logging.INFO]


def test_disabled_levels_are_not_emitted() -> None:
    logger = logging.getLogger("sitekit.test.quiet")
    logger.setLevel(logging.WARNING)
    assert log_message("debug", "noise", logger=logger) is False


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(InvalidLogLevelError):
        log_message("verbose", "nope")


def test_interpolate_keeps_unknown_placeholders() -> None:
    assert interpolate("{known} {unknown}", {"known": "x"}) == "x {unknown}"
    assert interpolate("{known}", None) == "{known}"
