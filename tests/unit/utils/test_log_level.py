from __future__ import annotations

import logging

import pytest

from fluenthttp import set_log_level
from fluenthttp.utils.log_level import OFF, TRACE


def package_level() -> int:
    return logging.getLogger("fluenthttp").level


###################################
#     Tests for set_log_level     #
###################################


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        ("trace", TRACE),
        ("debug", logging.DEBUG),
        ("info", logging.INFO),
        ("warn", logging.WARNING),
        ("error", logging.ERROR),
        ("off", OFF),
        ("DEBUG", logging.DEBUG),
        ("Warn", logging.WARNING),
        ("OFF", OFF),
    ],
)
def test_set_log_level(level: str, expected: int) -> None:
    set_log_level(level)
    assert package_level() == expected


@pytest.mark.parametrize("level", ["verbose", "warning", "", "critical", None])
def test_set_log_level_unsupported(level: str | None) -> None:
    before = package_level()
    with pytest.raises(ValueError, match=r"Unsupported log level"):
        set_log_level(level)
    assert package_level() == before


def test_set_log_level_applies_to_submodules() -> None:
    set_log_level("debug")
    assert logging.getLogger("fluenthttp.interceptors").isEnabledFor(logging.DEBUG)
    set_log_level("off")
    assert not logging.getLogger("fluenthttp.executor").isEnabledFor(logging.CRITICAL)


def test_trace_level_name() -> None:
    assert logging.getLevelName(TRACE) == "TRACE"
