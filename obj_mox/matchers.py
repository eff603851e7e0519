"""Argument list matchers attached to expectations."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._formatting import format_args
from .comparators import Comparator, Eq, coerce, is_wildcard
from .errors import MisconfiguredExpectationError


class ArgumentMatcher(t.Protocol):
    """Predicate over the full argument list of a call."""

    def matches(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> bool:
        """Return ``True`` if the call's arguments are acceptable."""
        ...

    def describe(self) -> str:
        """Return the expected argument list for diagnostics."""
        ...

    def explain(self, args: t.Sequence[object], kwargs: t.Mapping[str, object]) -> str:
        """Return why the arguments were rejected, or ``""`` when they match."""
        ...


@dc.dataclass(frozen=True, slots=True)
class AnyArgs:
    """Accept every argument list."""

    def matches(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> bool:
        """Return ``True`` unconditionally."""
        return True

    def describe(self) -> str:
        """Return the wildcard argument marker."""
        return "*args, **kwargs"

    def explain(self, args: t.Sequence[object], kwargs: t.Mapping[str, object]) -> str:
        """Return ``""``; any arguments match."""
        return ""


@dc.dataclass(frozen=True, slots=True)
class NoArgs:
    """Accept only calls made without arguments."""

    def matches(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> bool:
        """Return ``True`` when no arguments were passed."""
        return not args and not kwargs

    def describe(self) -> str:
        """Return an empty argument list."""
        return ""

    def explain(self, args: t.Sequence[object], kwargs: t.Mapping[str, object]) -> str:
        """Describe the unexpected arguments."""
        if self.matches(args, kwargs):
            return ""
        return f"expected no arguments, got ({format_args(args, kwargs)})"


@dc.dataclass(frozen=True, slots=True)
class ArgsMatching:
    """Match each argument against a comparator.

    Arity must agree, keyword names must be identical, and every comparator
    must accept its actual value. A *strict* matcher only admits exact
    equality comparators.
    """

    positional: tuple[Comparator, ...] = ()
    keywords: t.Mapping[str, Comparator] = dc.field(default_factory=dict)
    strict: bool = False

    def __post_init__(self) -> None:
        if not self.strict:
            return
        loose = [c for c in self.comparators() if is_wildcard(c)]
        if loose:
            listed = ", ".join(repr(c) for c in loose)
            msg = f"strict argument matching does not allow wildcards: {listed}"
            raise MisconfiguredExpectationError(msg)

    @classmethod
    def from_values(
        cls,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
        *,
        strict: bool = False,
        coerce_strict: bool = False,
    ) -> ArgsMatching:
        """Build a matcher from expected values, coercing each to a comparator."""
        return cls(
            tuple(coerce(arg, strict=coerce_strict) for arg in args),
            {key: coerce(val, strict=coerce_strict) for key, val in kwargs.items()},
            strict=strict,
        )

    def comparators(self) -> list[Comparator]:
        """Return every comparator, positional first."""
        return [*self.positional, *self.keywords.values()]

    def with_strict(self) -> ArgsMatching:
        """Return a strict copy of this matcher."""
        return dc.replace(self, strict=True)

    def matches(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> bool:
        """Return ``True`` if every comparator accepts its argument."""
        return not self.explain(args, kwargs)

    def describe(self) -> str:
        """Return the comparators rendered like a call signature."""
        parts = [_describe(c) for c in self.positional]
        parts.extend(f"{key}={_describe(c)}" for key, c in self.keywords.items())
        return ", ".join(parts)

    def explain(self, args: t.Sequence[object], kwargs: t.Mapping[str, object]) -> str:
        """Return the first reason *args*/*kwargs* are rejected."""
        if len(args) != len(self.positional):
            return (
                f"expected {len(self.positional)} positional argument(s), "
                f"got {len(args)}"
            )
        if set(kwargs) != set(self.keywords):
            return (
                f"expected keywords {sorted(self.keywords)}, got {sorted(kwargs)}"
            )
        for index, (arg, comparator) in enumerate(
            zip(args, self.positional, strict=True)
        ):
            if not comparator(arg):
                return f"arg[{index}]={arg!r} failed {comparator!r}"
        for key, comparator in self.keywords.items():
            if not comparator(kwargs[key]):
                return f"{key}={kwargs[key]!r} failed {comparator!r}"
        return ""


def _describe(comparator: Comparator) -> str:
    if isinstance(comparator, Eq):
        return repr(comparator.expected)
    return repr(comparator)


__all__ = ["AnyArgs", "ArgsMatching", "ArgumentMatcher", "NoArgs"]
