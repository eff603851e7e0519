"""Unit tests for the ``UNDEFINED`` placeholder."""

from __future__ import annotations

import copy
import pickle

from obj_mox.undefined import UNDEFINED, Undefined, is_undefined


def test_single_instance() -> None:
    """Constructing the class always yields the shared instance."""
    assert Undefined() is UNDEFINED
    assert is_undefined(Undefined())
    assert not is_undefined(None)


def test_operations_return_itself() -> None:
    """Attribute access, calls, and indexing are absorbed."""
    assert UNDEFINED.anything is UNDEFINED
    assert UNDEFINED.some.deep.chain() is UNDEFINED
    assert UNDEFINED(1, key=2) is UNDEFINED
    assert UNDEFINED["key"] is UNDEFINED
    assert UNDEFINED.method().attr[0]() is UNDEFINED


def test_operators_return_itself() -> None:
    """Arithmetic, bitwise, and ordering operators are absorbed."""
    assert UNDEFINED + 1 is UNDEFINED
    assert 1 + UNDEFINED is UNDEFINED
    assert UNDEFINED * "x" is UNDEFINED
    assert -UNDEFINED is UNDEFINED
    assert (UNDEFINED | 4) is UNDEFINED
    assert (UNDEFINED < 3) is UNDEFINED


def test_assignment_is_ignored() -> None:
    """Setting attributes or items has no effect."""
    UNDEFINED.value = 5
    UNDEFINED["key"] = 5
    assert UNDEFINED.value is UNDEFINED


def test_identity_semantics() -> None:
    """Equality is identity and the placeholder is hashable."""
    assert UNDEFINED == UNDEFINED
    assert UNDEFINED != None  # noqa: E711
    assert {UNDEFINED: 1}[UNDEFINED] == 1


def test_container_protocols() -> None:
    """The placeholder is falsy, empty, and usable as a context manager."""
    assert not UNDEFINED
    assert list(UNDEFINED) == []
    assert len(UNDEFINED) == 0
    with UNDEFINED as entered:
        assert entered is UNDEFINED


def test_repr() -> None:
    """The repr names the placeholder."""
    assert repr(UNDEFINED) == "UNDEFINED"


def test_copy_and_pickle_preserve_identity() -> None:
    """Copies and round-trips resolve to the shared instance."""
    assert copy.copy(UNDEFINED) is UNDEFINED
    assert copy.deepcopy([UNDEFINED])[0] is UNDEFINED
    assert pickle.loads(pickle.dumps(UNDEFINED)) is UNDEFINED  # noqa: S301
