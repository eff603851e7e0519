"""Resolve calls on one mock method to one of its expectations."""

from __future__ import annotations

import logging
import typing as t

from .errors import OrderingViolationError, UnmatchedInvocationError
from .undefined import UNDEFINED

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation

logger = logging.getLogger(__name__)


class MethodDirector:
    """Own every expectation registered for one method name on one mock.

    Expectations are kept in registration order. When several expectations
    could accept a call the winner is chosen by, in turn:

    1. still short of its minimum, over already satisfied;
    2. among those still short of their minimum, a finite maximum over an
       unbounded one;
    3. most recently registered.
    """

    def __init__(self, mock_name: str, method: str) -> None:
        self.mock_name = mock_name
        self.method = method
        self._expectations: list[Expectation] = []
        self._serial = 0

    @property
    def expectations(self) -> list[Expectation]:
        """Return the registered expectations, oldest first."""
        return list(self._expectations)

    def add(self, expectation: Expectation) -> Expectation:
        """Register *expectation* behind every existing one."""
        self._serial += 1
        expectation.serial = self._serial
        self._expectations.append(expectation)
        return expectation

    def candidates(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> tuple[list[Expectation], list[Expectation]]:
        """Return ``(eligible, blocked)`` expectations accepting the arguments.

        ``blocked`` holds argument matches rejected only because their
        ordering rank is not yet eligible.
        """
        eligible: list[Expectation] = []
        blocked: list[Expectation] = []
        for exp in self._expectations:
            if not exp.matches_args(args, kwargs):
                continue
            if exp.group is not None and not exp.group.scope.is_eligible(exp):
                blocked.append(exp)
                continue
            if exp.is_exhausted:
                continue
            eligible.append(exp)
        return eligible, blocked

    def _overflow(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> Expectation | None:
        """Return the newest exhausted, ordering-eligible argument match."""
        exhausted = [
            exp
            for exp in self._expectations
            if exp.matches_args(args, kwargs)
            and exp.is_exhausted
            and (exp.group is None or exp.group.scope.is_eligible(exp))
        ]
        return max(exhausted, key=lambda exp: exp.serial) if exhausted else None

    @staticmethod
    def select(candidates: t.Sequence[Expectation]) -> Expectation:
        """Pick the winning expectation among *candidates*."""
        return max(
            candidates,
            key=lambda exp: (
                not exp.minimum_met,
                (not exp.minimum_met) and exp.max_calls is not None,
                exp.serial,
            ),
        )

    def resolve(
        self,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
        *,
        ignore_missing: bool = False,
    ) -> t.Any:
        """Match a call against the registered expectations and produce its result.

        On an ignoring mock a call matching only used-up expectations is
        counted on the newest of them, so verification reports the excess.

        Raises
        ------
        OrderingViolationError
            When the only argument matches are waiting on lower-ranked
            ordered expectations.
        UnmatchedInvocationError
            When no expectation accepts the call and *ignore_missing* is off.
        """
        eligible, blocked = self.candidates(args, kwargs)
        if eligible:
            exp = self.select(eligible)
            logger.debug(
                "%s.%s matched expectation #%d (%d/%s calls)",
                self.mock_name,
                self.method,
                exp.serial,
                exp.call_count + 1,
                "inf" if exp.max_calls is None else exp.max_calls,
            )
            return exp.record_call(args, kwargs)
        if ignore_missing:
            overflow = self._overflow(args, kwargs)
            if overflow is not None:
                # Counted past the maximum so verification reports it.
                logger.debug(
                    "%s.%s exceeded the maximum of expectation #%d",
                    self.mock_name,
                    self.method,
                    overflow.serial,
                )
                return overflow.record_call(args, kwargs)
            logger.debug(
                "%s.%s matched nothing; returning UNDEFINED",
                self.mock_name,
                self.method,
            )
            return UNDEFINED
        if blocked:
            blockers: list[Expectation] = []
            for exp in blocked:
                group = exp.group
                if group is None:  # pragma: no cover - blocked implies grouped
                    continue
                for blocker in group.scope.blockers(group.rank, exclude=exp):
                    if blocker not in blockers:
                        blockers.append(blocker)
            raise OrderingViolationError(
                self.mock_name,
                self.method,
                args,
                kwargs,
                self._expectations,
                blocked=blocked,
                blockers=blockers,
            )
        raise UnmatchedInvocationError(
            self.mock_name, self.method, args, kwargs, self._expectations
        )


__all__ = ["MethodDirector"]
