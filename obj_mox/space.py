"""MockSpace: the per-test container owning mocks and partial mocks."""

from __future__ import annotations

import logging
import types  # noqa: TC003
import typing as t

from .mock import Mock
from .ordering import OrderingScope
from .partial import PartialMock
from .verifier import Verifier

logger = logging.getLogger(__name__)


class MockSpace:
    """Create, verify, and tear down the test doubles of one test.

    Mocks created here share an ordering scope reachable through
    :meth:`Expectation.globally`, so ordering can span several mocks.
    """

    def __init__(self, *, verify_on_exit: bool = True) -> None:
        """Create a new space.

        Parameters
        ----------
        verify_on_exit:
            When ``True`` (the default), leaving a ``with`` block without an
            exception calls :meth:`verify`. Partial mocks are restored on exit
            either way.
        """
        self.ordering = OrderingScope("global")
        self._verify_on_exit = verify_on_exit
        self._mocks: list[Mock] = []
        self._partials: list[PartialMock] = []
        self._counter = 0

    @property
    def mocks(self) -> list[Mock]:
        """Return every mock tracked by this space, partial mocks included."""
        return [*self._mocks, *(partial.mock for partial in self._partials)]

    # ------------------------------------------------------------------
    # Context manager protocol
    # ------------------------------------------------------------------
    def __enter__(self) -> MockSpace:
        """Enter the space."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Verify when the block succeeded, then restore partial mocks."""
        try:
            if exc_type is None and self._verify_on_exit:
                self.verify()
        finally:
            self.teardown()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def mock(
        self,
        name: str | None = None,
        /,
        *,
        ignore_missing: bool = False,
        **stubs: object,
    ) -> Mock:
        """Create and track a new mock."""
        self._counter += 1
        mock = Mock(
            name or f"mock{self._counter}",
            space=self,
            ignore_missing=ignore_missing,
            **stubs,
        )
        self._mocks.append(mock)
        return mock

    def partial(self, target: object) -> PartialMock:
        """Return the tracked partial mock for *target*, creating it if needed."""
        for partial in self._partials:
            if partial.target is target:
                return partial
        partial = PartialMock(target, space=self)
        self._partials.append(partial)
        return partial

    def verify(self) -> None:
        """Verify every tracked mock in one pass."""
        Verifier().verify(*self.mocks)

    def teardown(self) -> None:
        """Restore every partial mock, most recent first."""
        errors: list[Exception] = []
        for partial in reversed(self._partials):
            try:
                partial.restore()
            except Exception as exc:  # noqa: BLE001 - keep restoring the rest
                logger.warning("Failed to restore %r: %s", partial, exc)
                errors.append(exc)
        if errors:
            raise errors[0]


__all__ = ["MockSpace"]
