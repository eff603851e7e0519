"""Exception hierarchy raised by obj-mox."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._formatting import (
    describe_expectation,
    format_args,
    format_call,
    format_sections,
    numbered,
)

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation


class ObjMoxError(Exception):
    """Base class for every error raised by obj-mox."""


class MisconfiguredExpectationError(ObjMoxError, ValueError):
    """An expectation was built from incompatible modifiers."""


class UnmatchedInvocationError(ObjMoxError, AssertionError):
    """A call on a mock matched none of its expectations."""

    title = "Unexpected method invocation."

    def __init__(
        self,
        mock_name: str,
        method: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
        expectations: t.Sequence[Expectation] = (),
    ) -> None:
        self.mock_name = mock_name
        self.method = method
        self.args_received = tuple(args)
        self.kwargs_received = dict(kwargs or {})
        self.expectations = list(expectations)
        super().__init__(self._render())

    @property
    def call_repr(self) -> str:
        """Return the offending call as ``mock.method(args)``."""
        return format_call(
            f"{self.mock_name}.{self.method}",
            format_args(self.args_received, self.kwargs_received),
        )

    def _sections(self) -> list[tuple[str, str]]:
        return [
            ("Actual call", self.call_repr),
            (
                "Registered expectations",
                numbered(
                    [
                        describe_expectation(exp, include_count=True)
                        for exp in self.expectations
                    ]
                ),
            ),
        ]

    def _render(self) -> str:
        return format_sections(self.title, self._sections())


class OrderingViolationError(UnmatchedInvocationError):
    """A call matched an expectation whose ordering rank is not yet eligible."""

    title = "Ordered expectation called out of order."

    def __init__(
        self,
        mock_name: str,
        method: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
        expectations: t.Sequence[Expectation] = (),
        *,
        blocked: t.Sequence[Expectation] = (),
        blockers: t.Sequence[Expectation] = (),
    ) -> None:
        self.blocked = list(blocked)
        self.blockers = list(blockers)
        super().__init__(mock_name, method, args, kwargs, expectations)

    def _sections(self) -> list[tuple[str, str]]:
        sections = super()._sections()[:1]
        sections.append(
            (
                "Matching but blocked",
                numbered([describe_expectation(exp) for exp in self.blocked]),
            )
        )
        sections.append(
            (
                "Waiting on",
                numbered(
                    [
                        describe_expectation(exp, include_count=True)
                        for exp in self.blockers
                    ]
                ),
            )
        )
        return sections


@dc.dataclass(frozen=True, slots=True)
class UnmetExpectation:
    """One expectation whose call count fell outside its bounds."""

    mock_name: str
    expectation: Expectation

    def describe(self) -> str:
        """Return the failure with the owning mock's name attached."""
        text = describe_expectation(self.expectation, include_count=True)
        return f"{self.mock_name}.{text}"


class VerificationError(ObjMoxError, AssertionError):
    """One or more expectations were not satisfied at verification time."""

    def __init__(self, failures: t.Sequence[UnmetExpectation]) -> None:
        self.failures = list(failures)
        msg = format_sections(
            "Unfulfilled expectations.",
            [("Failures", numbered([failure.describe() for failure in self.failures]))],
        )
        super().__init__(msg)


__all__ = [
    "MisconfiguredExpectationError",
    "ObjMoxError",
    "OrderingViolationError",
    "UnmatchedInvocationError",
    "UnmetExpectation",
    "VerificationError",
]
