"""Pytest plugin providing the ``obj_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .space import MockSpace

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("obj_mox")
    group.addoption(
        "--obj-mox-auto-verify",
        action="store_true",
        dest="obj_mox_auto_verify",
        default=None,
        help=(
            "Verify every mock created through the obj_mox fixture during "
            "teardown. Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-obj-mox-auto-verify",
        action="store_false",
        dest="obj_mox_auto_verify",
        default=None,
        help=(
            "Skip automatic verification of the obj_mox fixture. "
            "Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "obj_mox_auto_verify",
        "Verify every mock created through the obj_mox fixture during teardown.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "obj_mox(auto_verify: bool = True): override automatic "
            "verification for a single test."
        ),
    )


class _ObjMoxItem(t.Protocol):
    """pytest item carrying obj_mox teardown metadata."""

    _obj_mox_verify_error: Exception | None
    _obj_mox_verify_should_fail: bool


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach each phase report to the test item.

    The fixture teardown uses the call-phase report to decide whether a
    verification failure should fail the test or only be reported.
    """
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
    if rep.when == "teardown":
        _apply_deferred_verify_failure(item, rep)


def _auto_verify_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether the fixture should verify during teardown."""
    # Priority order: marker > fixture param > CLI option > INI setting

    marker_value = _get_marker_auto_verify(request)
    if marker_value is not None:
        return marker_value

    param_value = _get_param_auto_verify(request)
    if param_value is not None:
        return param_value

    config = request.config
    cli_value = config.getoption("obj_mox_auto_verify")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("obj_mox_auto_verify"))


def _get_marker_auto_verify(request: pytest.FixtureRequest) -> bool | None:
    """Return marker override for auto verification if present."""
    marker = request.node.get_closest_marker("obj_mox")
    if marker is None or "auto_verify" not in marker.kwargs:
        return None
    return bool(marker.kwargs["auto_verify"])


def _get_param_auto_verify(request: pytest.FixtureRequest) -> bool | None:
    """Return fixture parameter override for auto verification if present."""
    param = getattr(request, "param", None)
    if param is None:
        return None
    if isinstance(param, dict):
        if "auto_verify" in param:
            return bool(param["auto_verify"])
        keys = list(param.keys())
        msg = (
            "obj_mox fixture param dict must contain 'auto_verify' key, "
            f"got keys: {keys}"
        )
        raise TypeError(msg)
    if isinstance(param, bool):
        return param
    msg = (
        "obj_mox fixture param must be a bool or dict with 'auto_verify' key, "
        f"got {type(param).__name__}"
    )
    raise TypeError(msg)


def _apply_deferred_verify_failure(
    item: pytest.Item, report: pytest.TestReport
) -> None:
    """Report a verification error swallowed because the test already failed."""
    err: Exception | None = getattr(item, "_obj_mox_verify_error", None)
    if err is None:
        return
    delattr(item, "_obj_mox_verify_error")
    should_fail = getattr(item, "_obj_mox_verify_should_fail", False)
    if hasattr(item, "_obj_mox_verify_should_fail"):
        delattr(item, "_obj_mox_verify_should_fail")
    if not should_fail:
        report.sections.append(("obj_mox verification", f"{type(err).__name__}: {err}"))


@pytest.fixture
def obj_mox(request: pytest.FixtureRequest) -> t.Generator[MockSpace, None, None]:
    """Provide a :class:`MockSpace` verified and torn down after the test."""
    space = MockSpace(verify_on_exit=False)
    auto_verify = _auto_verify_enabled(request)
    try:
        yield space
    except Exception:
        logger.exception("Error during obj_mox fixture setup or test execution")
        raise
    finally:
        _teardown_space(request.node, space, auto_verify=auto_verify)


def _teardown_space(item: pytest.Item, space: MockSpace, *, auto_verify: bool) -> None:
    """Verify *space* when requested and restore its partial mocks."""
    typed_item = t.cast("_ObjMoxItem", item)
    should_raise = False
    if auto_verify:
        try:
            space.verify()
        except Exception as err:
            logger.exception("Error during obj_mox verification")
            typed_item._obj_mox_verify_error = err
            should_fail = not _call_stage_failed(item)
            typed_item._obj_mox_verify_should_fail = should_fail
            should_raise = should_fail
    try:
        space.teardown()
    except Exception:
        logger.exception("Error during obj_mox fixture cleanup")
        pytest.fail("obj_mox fixture cleanup failed")
    if should_raise:
        err = typed_item._obj_mox_verify_error
        pytest.fail(f"{type(err).__name__}: {err}")


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)
