"""Unit tests for :mod:`obj_mox.comparators` repr behaviour."""

from obj_mox.comparators import Any, Contains, Eq, HasEntries, IsA, Predicate, Regex


def test_any_repr() -> None:
    """``Any`` shows only its class name."""
    assert repr(Any()) == "Any()"


def test_eq_repr() -> None:
    """``Eq`` shows the expected value."""
    assert repr(Eq("CPWR")) == "Eq(expected='CPWR')"


class CustomType:
    """Example user-defined type for ``IsA`` tests."""

    pass


def test_is_a_repr_with_custom_type() -> None:
    """User-defined classes show their fully-qualified name."""
    expected = f"IsA(typ=<class '{CustomType.__module__}.{CustomType.__qualname__}'>)"
    assert repr(IsA(CustomType)) == expected


def test_regex_repr() -> None:
    """``Regex`` exposes its original pattern string only."""
    assert repr(Regex(r"^foo$")) == "Regex(pattern='^foo$')"


def test_contains_repr() -> None:
    """``Contains`` shows the item."""
    assert repr(Contains("bar")) == "Contains(item='bar')"


def test_has_entries_repr() -> None:
    """``HasEntries`` shows the expected mapping."""
    assert repr(HasEntries({"a": 1})) == "HasEntries(entries={'a': 1})"


def test_predicate_repr_lambda() -> None:
    """Lambda functions are represented generically."""
    rep = repr(Predicate(lambda v: True))
    assert rep.startswith("Predicate(func=<function")
    assert "lambda" in rep
    assert rep.endswith(")")


def test_predicate_repr_builtin() -> None:
    """Built-in functions include their name."""
    rep = repr(Predicate(str.isdigit))
    assert "isdigit" in rep
    assert rep.startswith("Predicate(func=<")
