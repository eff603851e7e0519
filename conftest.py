"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest

pytest_plugins = ("pytester",)


@pytest.fixture(autouse=True)
def obj_mox_debug_logging(
    caplog: pytest.LogCaptureFixture,
) -> t.Generator[None, None, None]:
    """Capture obj_mox debug output so failing tests show dispatch decisions."""
    with caplog.at_level(logging.DEBUG, logger="obj_mox"):
        yield
