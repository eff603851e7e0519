"""Return value sources used by expectations."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .errors import MisconfiguredExpectationError


class ReturnValueSource(t.Protocol):
    """Produce the result of a matched call."""

    def produce(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> t.Any:
        """Return (or raise) the outcome for a call with *args*/*kwargs*."""
        ...

    def describe(self) -> str:
        """Return a short description for diagnostics."""
        ...


@dc.dataclass(slots=True)
class Constant:
    """Always return ``value``."""

    value: object = None

    def produce(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> t.Any:
        """Return the configured value."""
        return self.value

    def describe(self) -> str:
        """Return a short description for diagnostics."""
        return f"returns {self.value!r}"


@dc.dataclass(slots=True)
class ValueSequence:
    """Return ``values`` in order, repeating the last once exhausted."""

    values: list[object]
    position: int = 0

    def __post_init__(self) -> None:
        if not self.values:
            msg = "a return value sequence needs at least one value"
            raise MisconfiguredExpectationError(msg)
        self.values = list(self.values)

    def produce(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> t.Any:
        """Return the next value in the sequence."""
        value = self.values[min(self.position, len(self.values) - 1)]
        self.position += 1
        return value

    @property
    def exhausted(self) -> bool:
        """Return ``True`` once every value has been handed out."""
        return self.position >= len(self.values)

    def describe(self) -> str:
        """Return a short description for diagnostics."""
        return "returns " + ", ".join(repr(value) for value in self.values)


@dc.dataclass(slots=True)
class Computed:
    """Return whatever ``func`` computes from the call arguments."""

    func: t.Callable[..., t.Any]

    def produce(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> t.Any:
        """Call ``func`` with the actual arguments."""
        return self.func(*args, **kwargs)

    def describe(self) -> str:
        """Return a short description for diagnostics."""
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"returns result of {name}"


@dc.dataclass(slots=True)
class Raises:
    """Raise ``exc`` on every call."""

    exc: BaseException | type[BaseException]

    def __post_init__(self) -> None:
        if isinstance(self.exc, BaseException):
            return
        if isinstance(self.exc, type) and issubclass(self.exc, BaseException):
            return
        msg = f"raises() needs an exception instance or class, got {self.exc!r}"
        raise MisconfiguredExpectationError(msg)

    def produce(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> t.NoReturn:
        """Raise the configured exception."""
        raise self.exc

    def describe(self) -> str:
        """Return a short description for diagnostics."""
        return f"raises {self.exc!r}"


__all__ = ["Computed", "Constant", "Raises", "ReturnValueSource", "ValueSequence"]
