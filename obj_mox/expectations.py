"""Expectation state and the chainable builder used to configure it."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._formatting import describe_expectation
from .errors import MisconfiguredExpectationError
from .matchers import AnyArgs, ArgsMatching, ArgumentMatcher, NoArgs
from .returns import Computed, Constant, Raises, ReturnValueSource, ValueSequence
from .undefined import UNDEFINED

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .mock import Mock
    from .ordering import OrderingGroup, OrderingScope


def _validate_count(count: object, modifier: str) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        msg = f"{modifier}() needs an int call count, got {count!r}"
        raise MisconfiguredExpectationError(msg)
    if count < 0:
        msg = f"{modifier}() needs a non-negative call count, got {count}"
        raise MisconfiguredExpectationError(msg)
    return count


@dc.dataclass(slots=True, eq=False)
class Expectation:
    """One expected invocation pattern for a single method name.

    Expectations are created by :meth:`Mock.expect`, which registers them
    immediately; the chainable modifiers below refine them in place. The
    defaults accept any arguments, any number of times, in any order, and
    return ``None``.
    """

    method: str
    mock: Mock | None = dc.field(default=None, repr=False)
    matcher: ArgumentMatcher = dc.field(default_factory=AnyArgs)
    min_calls: int = 0
    max_calls: int | None = None
    call_count: int = 0
    group: OrderingGroup | None = None
    source: ReturnValueSource = dc.field(default_factory=Constant)
    strict: bool = False
    serial: int = 0
    _exact: bool = dc.field(default=False, repr=False)
    _lower: bool = dc.field(default=False, repr=False)
    _upper: bool = dc.field(default=False, repr=False)
    _global: bool = dc.field(default=False, repr=False)

    # ------------------------------------------------------------------
    # Argument constraints
    # ------------------------------------------------------------------
    def with_args(self, *args: object, **kwargs: object) -> Expectation:
        """Require the call's arguments to match *args* and *kwargs*.

        Plain values must compare equal, compiled regular expressions are
        searched in the argument's string form, classes match instances, and
        :mod:`~obj_mox.comparators` objects apply their own test.
        """
        self.matcher = ArgsMatching.from_values(args, kwargs, strict=self.strict)
        return self

    def with_no_args(self) -> Expectation:
        """Require the call to pass no arguments at all."""
        self.matcher = NoArgs()
        return self

    def with_any_args(self) -> Expectation:
        """Accept any argument list."""
        if self.strict:
            msg = f"{self.method}: with_any_args() conflicts with strict_args()"
            raise MisconfiguredExpectationError(msg)
        self.matcher = AnyArgs()
        return self

    def strict_args(self) -> Expectation:
        """Restrict argument matching to exact equality."""
        if isinstance(self.matcher, ArgsMatching):
            self.matcher = self.matcher.with_strict()
        self.strict = True
        return self

    # ------------------------------------------------------------------
    # Return values
    # ------------------------------------------------------------------
    def returns(self, *values: object) -> Expectation:
        """Return *values* in turn; the last one repeats once exhausted."""
        if len(values) > 1:
            self.source = ValueSequence(list(values))
        else:
            self.source = Constant(values[0] if values else None)
        return self

    def returns_computed(self, func: t.Callable[..., t.Any]) -> Expectation:
        """Return ``func(*args, **kwargs)`` for each matched call."""
        if not callable(func):
            msg = f"returns_computed() needs a callable, got {func!r}"
            raise MisconfiguredExpectationError(msg)
        self.source = Computed(func)
        return self

    def returns_undefined(self) -> Expectation:
        """Return the :data:`~obj_mox.undefined.UNDEFINED` placeholder."""
        self.source = Constant(UNDEFINED)
        return self

    def raises(self, exc: BaseException | type[BaseException]) -> Expectation:
        """Raise *exc* whenever the expectation matches."""
        self.source = Raises(exc)
        return self

    # ------------------------------------------------------------------
    # Cardinality
    # ------------------------------------------------------------------
    def times(self, count: int) -> Expectation:
        """Require exactly *count* calls."""
        return self._fix(_validate_count(count, "times"), "times")

    def once(self) -> Expectation:
        """Require exactly one call."""
        return self._fix(1, "once")

    def twice(self) -> Expectation:
        """Require exactly two calls."""
        return self._fix(2, "twice")

    def never(self) -> Expectation:
        """Forbid matching calls."""
        return self._fix(0, "never")

    def zero_or_more_times(self) -> Expectation:
        """Allow any number of calls, including none."""
        self._fix(0, "zero_or_more_times")
        self.max_calls = None
        return self

    def at_least(self, count: int) -> Expectation:
        """Require at least *count* calls."""
        count = _validate_count(count, "at_least")
        self._check_widening("at_least", repeated=self._lower)
        if self.max_calls is not None and count > self.max_calls:
            msg = (
                f"{self.method}: at_least({count}) exceeds the upper bound "
                f"{self.max_calls}"
            )
            raise MisconfiguredExpectationError(msg)
        self.min_calls = count
        self._lower = True
        self._bounds_changed()
        return self

    def at_most(self, count: int) -> Expectation:
        """Allow at most *count* calls."""
        count = _validate_count(count, "at_most")
        self._check_widening("at_most", repeated=self._upper)
        if count < self.min_calls:
            msg = (
                f"{self.method}: at_most({count}) is below the lower bound "
                f"{self.min_calls}"
            )
            raise MisconfiguredExpectationError(msg)
        self.max_calls = count
        self._upper = True
        self._bounds_changed()
        return self

    def _fix(self, count: int, modifier: str) -> Expectation:
        if self._exact or self._lower or self._upper:
            msg = f"{self.method}: {modifier}() conflicts with an earlier call count"
            raise MisconfiguredExpectationError(msg)
        self.min_calls = self.max_calls = count
        self._exact = True
        self._bounds_changed()
        return self

    def _check_widening(self, modifier: str, *, repeated: bool) -> None:
        if self._exact:
            msg = f"{self.method}: {modifier}() conflicts with an exact call count"
            raise MisconfiguredExpectationError(msg)
        if repeated:
            msg = f"{self.method}: {modifier}() was already given"
            raise MisconfiguredExpectationError(msg)

    def _bounds_changed(self) -> None:
        if self.group is not None:
            self.group.scope.refresh()

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------
    def globally(self) -> Expectation:
        """Make the following :meth:`ordered` use the mock space's scope."""
        if self.mock is None or self.mock.space is None:
            msg = f"{self.method}: globally() needs a mock created by a MockSpace"
            raise MisconfiguredExpectationError(msg)
        if self.group is not None:
            msg = f"{self.method}: globally() must come before ordered()"
            raise MisconfiguredExpectationError(msg)
        self._global = True
        return self

    def ordered(self, group: str | None = None) -> Expectation:
        """Order this expectation after every earlier ordered expectation.

        Expectations naming the same *group* share a rank and may be called
        in any order relative to each other.
        """
        if self.group is not None:
            msg = f"{self.method}: ordered() was already given"
            raise MisconfiguredExpectationError(msg)
        scope = self._ordering_scope()
        self.group = scope.group(group)
        scope.bind(self)
        return self

    def _ordering_scope(self) -> OrderingScope:
        if self.mock is None:
            msg = f"{self.method}: ordered() needs an expectation owned by a mock"
            raise MisconfiguredExpectationError(msg)
        if self._global and self.mock.space is not None:
            return self.mock.space.ordering
        return self.mock.ordering

    # ------------------------------------------------------------------
    # Matching state
    # ------------------------------------------------------------------
    @property
    def minimum_met(self) -> bool:
        """Return ``True`` once the lower call bound is reached."""
        return self.call_count >= self.min_calls

    @property
    def is_exhausted(self) -> bool:
        """Return ``True`` when a finite upper bound has been reached."""
        return self.max_calls is not None and self.call_count >= self.max_calls

    @property
    def satisfied(self) -> bool:
        """Return ``True`` when the call count lies within bounds."""
        return self.minimum_met and (
            self.max_calls is None or self.call_count <= self.max_calls
        )

    def matches_args(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> bool:
        """Return ``True`` if *args*/*kwargs* satisfy the argument matcher."""
        return self.matcher.matches(args, kwargs)

    def record_call(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> t.Any:
        """Count a matched call and produce its result."""
        self.call_count += 1
        if self.group is not None and self.call_count == self.min_calls:
            self.group.scope.refresh()
        return self.source.produce(args, kwargs)

    def describe(self, *, include_count: bool = False) -> str:
        """Return a human readable representation."""
        return describe_expectation(self, include_count=include_count)


__all__ = ["Expectation"]
