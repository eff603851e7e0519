"""Unit tests for the expectation builder and its misconfiguration checks."""

from __future__ import annotations

import re
import typing as t

import pytest

from obj_mox import Any, Eq, Mock, MockSpace, UNDEFINED
from obj_mox.errors import MisconfiguredExpectationError
from obj_mox.expectations import Expectation
from obj_mox.matchers import AnyArgs, ArgsMatching, NoArgs
from obj_mox.returns import Computed, Constant, Raises, ValueSequence


@pytest.fixture
def mock() -> Mock:
    """Return a fresh mock named ``db``."""
    return Mock("db")


def test_defaults(mock: Mock) -> None:
    """A bare expectation accepts anything, any number of times, unordered."""
    exp = mock.expect("query")
    assert isinstance(exp.matcher, AnyArgs)
    assert (exp.min_calls, exp.max_calls) == (0, None)
    assert exp.group is None
    assert isinstance(exp.source, Constant)
    assert exp.source.value is None
    assert exp.satisfied


def test_builder_methods_chain(mock: Mock) -> None:
    """Every modifier returns the expectation itself."""
    exp = mock.expect("update")
    assert exp.with_args(5).returns(None).once().ordered() is exp


def test_with_args_builds_argument_matcher(mock: Mock) -> None:
    """with_args stores comparators for positional and keyword values."""
    exp = mock.expect("update").with_args(5, mode="fast")
    assert isinstance(exp.matcher, ArgsMatching)
    assert exp.matches_args((5,), {"mode": "fast"})
    assert not exp.matches_args((5,), {})


def test_with_no_args_and_with_any_args(mock: Mock) -> None:
    """Argument constraints can be replaced by later modifiers."""
    exp = mock.expect("gets").with_no_args()
    assert isinstance(exp.matcher, NoArgs)
    exp.with_any_args()
    assert isinstance(exp.matcher, AnyArgs)


@pytest.mark.parametrize(
    ("values", "source_type"),
    [((), Constant), ((1,), Constant), ((1, 2), ValueSequence)],
)
def test_returns_picks_source(
    mock: Mock, values: tuple[object, ...], source_type: type
) -> None:
    """One value is constant, several form a sequence."""
    exp = mock.expect("gets").returns(*values)
    assert isinstance(exp.source, source_type)


def test_other_return_sources(mock: Mock) -> None:
    """Computed, undefined, and raising sources are available."""
    assert isinstance(mock.expect("a").returns_computed(len).source, Computed)
    assert mock.expect("b").returns_undefined().source.produce((), {}) is UNDEFINED
    assert isinstance(mock.expect("c").raises(KeyError).source, Raises)


def test_returns_computed_requires_callable(mock: Mock) -> None:
    """A non-callable computed source is rejected immediately."""
    with pytest.raises(MisconfiguredExpectationError):
        mock.expect("a").returns_computed(42)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("configure", "bounds"),
    [
        (lambda e: e.once(), (1, 1)),
        (lambda e: e.twice(), (2, 2)),
        (lambda e: e.never(), (0, 0)),
        (lambda e: e.times(4), (4, 4)),
        (lambda e: e.zero_or_more_times(), (0, None)),
        (lambda e: e.at_least(2), (2, None)),
        (lambda e: e.at_most(3), (0, 3)),
        (lambda e: e.at_least(1).at_most(3), (1, 3)),
        (lambda e: e.at_most(3).at_least(1), (1, 3)),
    ],
)
def test_cardinality_modifiers(
    mock: Mock,
    configure: t.Callable[[Expectation], Expectation],
    bounds: tuple[int, int | None],
) -> None:
    """Each cardinality modifier sets the expected bounds."""
    exp = configure(mock.expect("query"))
    assert (exp.min_calls, exp.max_calls) == bounds


@pytest.mark.parametrize(
    "configure",
    [
        pytest.param(lambda e: e.once().at_least(1), id="once-then-at_least"),
        pytest.param(lambda e: e.at_least(1).once(), id="at_least-then-once"),
        pytest.param(lambda e: e.once().twice(), id="exact-twice"),
        pytest.param(lambda e: e.times(2).at_most(5), id="times-then-at_most"),
        pytest.param(lambda e: e.at_least(1).at_least(2), id="repeated-at_least"),
        pytest.param(lambda e: e.at_most(1).at_most(2), id="repeated-at_most"),
        pytest.param(lambda e: e.at_most(1).at_least(2), id="crossing-bounds"),
        pytest.param(lambda e: e.at_least(3).at_most(2), id="crossing-bounds-rev"),
        pytest.param(lambda e: e.times(-1), id="negative"),
        pytest.param(lambda e: e.times(1.5), id="non-int"),
        pytest.param(lambda e: e.at_least(True), id="bool"),
    ],
)
def test_incompatible_cardinality_is_misconfigured(
    mock: Mock, configure: t.Callable[[Expectation], Expectation]
) -> None:
    """Conflicting call counts fail at registration time."""
    with pytest.raises(MisconfiguredExpectationError):
        configure(mock.expect("query"))


def test_ordered_twice_is_misconfigured(mock: Mock) -> None:
    """An expectation takes exactly one ordering designation."""
    exp = mock.expect("query").ordered()
    with pytest.raises(MisconfiguredExpectationError):
        exp.ordered("queries")


def test_ordered_requires_owning_mock() -> None:
    """A detached expectation has no scope to be ordered in."""
    with pytest.raises(MisconfiguredExpectationError):
        Expectation("query").ordered()


def test_globally_requires_space(mock: Mock) -> None:
    """Global ordering needs a mock created by a MockSpace."""
    with pytest.raises(MisconfiguredExpectationError):
        mock.expect("query").globally()


def test_globally_after_ordered_is_misconfigured() -> None:
    """globally() must precede ordered()."""
    mock = MockSpace().mock("db")
    exp = mock.expect("query").ordered()
    with pytest.raises(MisconfiguredExpectationError):
        exp.globally()


def test_strict_args_converts_existing_matcher(mock: Mock) -> None:
    """strict_args keeps exact values and marks the matcher strict."""
    exp = mock.expect("update").with_args(5).strict_args()
    assert exp.strict
    assert isinstance(exp.matcher, ArgsMatching)
    assert exp.matcher.strict
    assert exp.matcher.positional == (Eq(5),)


@pytest.mark.parametrize(
    "configure",
    [
        pytest.param(lambda e: e.with_args(Any()).strict_args(), id="wildcard-first"),
        pytest.param(
            lambda e: e.strict_args().with_args(re.compile("^a")), id="strict-first"
        ),
        pytest.param(lambda e: e.strict_args().with_any_args(), id="any-args"),
    ],
)
def test_strict_args_rejects_wildcards(
    mock: Mock, configure: t.Callable[[Expectation], Expectation]
) -> None:
    """Strict argument matching and wildcards cannot be combined."""
    with pytest.raises(MisconfiguredExpectationError):
        configure(mock.expect("update"))


def test_describe_includes_counts_and_group(mock: Mock) -> None:
    """Descriptions carry method, arguments, bounds, and ordering."""
    exp = mock.expect("query").with_args("CPWR").once().ordered("queries")
    assert exp.describe() == "query('CPWR')\nordered='queries' (rank 1)"
    assert exp.describe(include_count=True) == (
        "query('CPWR')\n"
        "expected calls=exactly 1\n"
        "actual calls=0\n"
        "ordered='queries' (rank 1)"
    )
