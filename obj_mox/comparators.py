"""Comparator classes used for argument matching."""

from __future__ import annotations

import abc
import dataclasses as dc
import re
import typing as t


class Comparator(abc.ABC):
    """Callable returning ``True`` when a value matches.

    Subclasses are dataclasses so their ``repr`` doubles as the description
    shown in diagnostics.
    """

    __slots__ = ()

    @abc.abstractmethod
    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""


@dc.dataclass(frozen=True, slots=True)
class Any(Comparator):
    """Match any value."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True


@dc.dataclass(frozen=True, slots=True)
class Eq(Comparator):
    """Match values equal to ``expected``."""

    expected: object

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* equals ``expected``."""
        return bool(value == self.expected)


@dc.dataclass(frozen=True, slots=True)
class IsA(Comparator):
    """Match instances of ``typ``."""

    typ: type | tuple[type, ...]

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* is an instance of ``typ``."""
        return isinstance(value, self.typ)


@dc.dataclass(frozen=True, slots=True, init=False)
class Regex(Comparator):
    """Match if ``pattern`` is found in the string form of *value*."""

    pattern: str
    _compiled: re.Pattern[str] = dc.field(repr=False, compare=False)

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
        object.__setattr__(self, "pattern", compiled.pattern)
        object.__setattr__(self, "_compiled", compiled)

    def __call__(self, value: object) -> bool:
        """Return ``True`` if the regex matches ``str(value)``."""
        return self._compiled.search(str(value)) is not None


@dc.dataclass(frozen=True, slots=True)
class Contains(Comparator):
    """Match if ``item`` is found in *value*."""

    item: object

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``item`` is in *value*."""
        try:
            return self.item in value  # type: ignore[operator]
        except TypeError:
            return False


@dc.dataclass(frozen=True, slots=True)
class StartsWith(Comparator):
    """Match if *value* is a string beginning with ``prefix``."""

    prefix: str

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return isinstance(value, str) and value.startswith(self.prefix)


@dc.dataclass(frozen=True, slots=True)
class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    func: t.Callable[[t.Any], object]

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))


@dc.dataclass(frozen=True, slots=True, init=False)
class Ducktype(Comparator):
    """Match objects providing every method in ``names``."""

    names: tuple[str, ...]

    def __init__(self, *names: str) -> None:
        object.__setattr__(self, "names", names)

    def __call__(self, value: object) -> bool:
        """Return ``True`` if each name resolves to a callable on *value*."""
        return all(callable(getattr(value, name, None)) for name in self.names)


@dc.dataclass(frozen=True, slots=True)
class HasEntries(Comparator):
    """Match mappings containing every key/value pair in ``entries``."""

    entries: t.Mapping[object, object]

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* holds each expected entry."""
        if not isinstance(value, t.Mapping):
            return False
        missing = object()
        return all(
            value.get(key, missing) == expected
            for key, expected in self.entries.items()
        )


def coerce(value: object, *, strict: bool = False) -> Comparator:
    """Return the comparator standing for an expected argument *value*.

    Comparators pass through unchanged, compiled regular expressions match by
    pattern, classes match their instances, and everything else must compare
    equal. In *strict* mode every value is compared for equality.
    """
    if strict:
        return Eq(value)
    if isinstance(value, Comparator):
        return value
    if isinstance(value, re.Pattern):
        return Regex(value)
    if isinstance(value, type):
        return IsA(value)
    return Eq(value)


def is_wildcard(comparator: Comparator) -> bool:
    """Return ``True`` when *comparator* accepts more than one exact value."""
    return not isinstance(comparator, Eq)


__all__ = [
    "Any",
    "Comparator",
    "Contains",
    "Ducktype",
    "Eq",
    "HasEntries",
    "IsA",
    "Predicate",
    "Regex",
    "StartsWith",
    "coerce",
    "is_wildcard",
]
