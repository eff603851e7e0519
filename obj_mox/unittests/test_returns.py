"""Unit tests for return value sources."""

from __future__ import annotations

import pytest

from obj_mox.errors import MisconfiguredExpectationError
from obj_mox.returns import Computed, Constant, Raises, ValueSequence


def test_constant_returns_same_value() -> None:
    """Constant ignores the arguments and returns its value."""
    source = Constant([1, 2, 3])
    assert source.produce((), {}) == [1, 2, 3]
    assert source.produce((9,), {"x": 1}) is source.value


@pytest.mark.parametrize(
    ("values", "calls", "expected"),
    [
        (["a", "b"], 3, ["a", "b", "b"]),
        (["a", "b", "c"], 5, ["a", "b", "c", "c", "c"]),
        (["only"], 2, ["only", "only"]),
        ([1, 2], 2, [1, 2]),
    ],
)
def test_value_sequence_repeats_last_value(
    values: list[object], calls: int, expected: list[object]
) -> None:
    """After K values the K-th value repeats for every later call."""
    source = ValueSequence(values)
    assert [source.produce((), {}) for _ in range(calls)] == expected


def test_value_sequence_tracks_exhaustion() -> None:
    """``exhausted`` flips once every value was handed out."""
    source = ValueSequence([1, 2])
    source.produce((), {})
    assert not source.exhausted
    source.produce((), {})
    assert source.exhausted


def test_value_sequence_copies_input() -> None:
    """Mutating the original list does not affect the sequence."""
    values = [1, 2]
    source = ValueSequence(values)
    values.append(3)
    assert source.values == [1, 2]


def test_empty_value_sequence_is_misconfigured() -> None:
    """A sequence needs at least one value."""
    with pytest.raises(MisconfiguredExpectationError):
        ValueSequence([])


def test_computed_receives_call_arguments() -> None:
    """Computed passes the actual positional and keyword arguments."""
    quotes = {"CPWR": 12.3, "MSFT": 10.0}
    source = Computed(lambda symbol, default=0.0: quotes.get(symbol, default))
    assert source.produce(("CPWR",), {}) == 12.3
    assert source.produce(("XYZY",), {"default": 3.3}) == 3.3


@pytest.mark.parametrize("exc", [KeyError("missing"), KeyError])
def test_raises_raises_on_every_call(exc: BaseException | type[BaseException]) -> None:
    """Raises accepts exception instances and classes."""
    source = Raises(exc)
    for _ in range(2):
        with pytest.raises(KeyError):
            source.produce((), {})


def test_raises_rejects_non_exceptions() -> None:
    """Only exceptions can be raised."""
    with pytest.raises(MisconfiguredExpectationError):
        Raises("boom")  # type: ignore[arg-type]


def test_descriptions() -> None:
    """Each source describes itself for diagnostics."""
    assert Constant(1).describe() == "returns 1"
    assert ValueSequence(["a", "b"]).describe() == "returns 'a', 'b'"
    assert Raises(KeyError).describe() == "raises <class 'KeyError'>"
