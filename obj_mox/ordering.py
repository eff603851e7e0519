"""Ordering groups and the scopes that rank them."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


@dc.dataclass(frozen=True, slots=True)
class OrderingGroup:
    """A rank within an :class:`OrderingScope`.

    Plain ``ordered()`` calls each receive a fresh anonymous group named
    ``"default"``; named groups share one rank between every expectation that
    names them.
    """

    name: str
    rank: int
    scope: OrderingScope = dc.field(repr=False, compare=False)


class OrderingScope:
    """Allocate ranks and decide which ordered expectations may match.

    An ordered expectation with rank ``r`` is eligible only once every other
    expectation in the same scope with a lower rank has met its minimum call
    count. Expectations sharing a rank may be satisfied in any order.
    """

    def __init__(self, name: str = "mock") -> None:
        self.name = name
        self._counter = 0
        self._named: dict[str, OrderingGroup] = {}
        self._members: list[Expectation] = []
        self._watermark = 0

    @property
    def watermark(self) -> int:
        """Highest rank at or below which every minimum has been met."""
        return self._watermark

    @property
    def members(self) -> list[Expectation]:
        """Return the ordered expectations bound to this scope."""
        return list(self._members)

    def group(self, name: str | None = None) -> OrderingGroup:
        """Return the group for *name*, allocating a new rank when needed."""
        if name is None or name == DEFAULT_GROUP:
            return self._allocate(DEFAULT_GROUP)
        group = self._named.get(name)
        if group is None:
            group = self._allocate(name)
            self._named[name] = group
        return group

    def _allocate(self, name: str) -> OrderingGroup:
        self._counter += 1
        return OrderingGroup(name, self._counter, self)

    def bind(self, expectation: Expectation) -> None:
        """Track *expectation* so its minimum gates higher ranks."""
        self._members.append(expectation)
        self.refresh()

    def blockers(
        self, rank: int, *, exclude: Expectation | None = None
    ) -> list[Expectation]:
        """Return lower-ranked expectations still short of their minimum."""
        return [
            exp
            for exp in self._members
            if exp is not exclude
            and exp.group is not None
            and exp.group.rank < rank
            and not exp.minimum_met
        ]

    def is_eligible(self, expectation: Expectation) -> bool:
        """Return ``True`` when *expectation*'s rank may be matched now."""
        group = expectation.group
        if group is None:
            return True
        return not self.blockers(group.rank, exclude=expectation)

    def refresh(self) -> None:
        """Recompute the satisfied-rank watermark."""
        pending = [
            exp.group.rank
            for exp in self._members
            if exp.group is not None and not exp.minimum_met
        ]
        watermark = min(pending) - 1 if pending else self._counter
        if watermark != self._watermark:
            logger.debug(
                "Ordering scope %s watermark moved from %d to %d",
                self.name,
                self._watermark,
                watermark,
            )
        self._watermark = watermark


__all__ = ["DEFAULT_GROUP", "OrderingGroup", "OrderingScope"]
