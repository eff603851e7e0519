"""The :class:`Mock` test double and its call dispatch."""

from __future__ import annotations

import logging
import typing as t

from ._formatting import format_args
from .director import MethodDirector
from .expectations import Expectation
from .ordering import OrderingScope
from .recorder import Recorder
from .verifier import Verifier

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .space import MockSpace

logger = logging.getLogger(__name__)


class MockMethod:
    """Callable standing in for one method of a :class:`Mock`."""

    __slots__ = ("_mock", "_name")

    def __init__(self, mock: Mock, name: str) -> None:
        self._mock = mock
        self._name = name

    def __call__(self, *args: object, **kwargs: object) -> t.Any:
        """Funnel the call into :meth:`Mock.dispatch`."""
        return self._mock.dispatch(self._name, args, kwargs)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"<MockMethod {self._mock.name}.{self._name}>"


class Mock:
    """Stand-in object that checks calls against registered expectations.

    Every public attribute that is not part of the API below resolves to a
    :class:`MockMethod`, so ``mock.query(1)`` is routed to
    ``mock.dispatch("query", (1,), {})``. Methods whose names collide with the
    API can still be exercised through :meth:`dispatch` directly.

    Parameters
    ----------
    name:
        Display name used in diagnostics.
    space:
        Optional :class:`~obj_mox.space.MockSpace` owning the mock; required
        for :meth:`Expectation.globally`.
    ignore_missing:
        When ``True``, calls matching no expectation return
        :data:`~obj_mox.undefined.UNDEFINED` instead of failing.
    stubs:
        Method names mapped to constant return values, each registered as an
        expectation that may be called any number of times.
    """

    def __init__(
        self,
        name: str = "mock",
        /,
        *,
        space: MockSpace | None = None,
        ignore_missing: bool = False,
        **stubs: object,
    ) -> None:
        self.name = name
        self.space = space
        self.ignore_missing = ignore_missing
        self.ordering = OrderingScope(name)
        self.directors: dict[str, MethodDirector] = {}
        for method, value in stubs.items():
            self.expect(method).returns(value)

    def __getattr__(self, name: str) -> MockMethod:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return MockMethod(self, name)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"<Mock {self.name!r}>"

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def director(self, method: str) -> MethodDirector:
        """Return the director for *method*, creating it on first use."""
        director = self.directors.get(method)
        if director is None:
            director = MethodDirector(self.name, method)
            self.directors[method] = director
        return director

    def expect(self, method: str) -> Expectation:
        """Register and return a new expectation for *method*."""
        if not method:
            msg = "method name must be a non-empty string"
            raise ValueError(msg)
        return self.director(method).add(Expectation(method, mock=self))

    should_receive = expect

    def set_ignore_missing(self, flag: bool = True) -> Mock:  # noqa: FBT001, FBT002
        """Return ``UNDEFINED`` for unmatched calls when *flag* is set."""
        self.ignore_missing = flag
        return self

    should_ignore_missing = set_ignore_missing

    def record(self, func: t.Callable[[Recorder], object]) -> Recorder:
        """Call *func* with a :class:`Recorder` registering expectations here."""
        recorder = Recorder(self)
        func(recorder)
        return recorder

    should_expect = record

    def expectations(self) -> list[Expectation]:
        """Return every expectation, grouped by method in registration order."""
        return [
            exp for director in self.directors.values() for exp in director.expectations
        ]

    # ------------------------------------------------------------------
    # Dispatch and verification
    # ------------------------------------------------------------------
    def dispatch(
        self,
        method: str,
        args: t.Sequence[object] = (),
        kwargs: t.Mapping[str, object] | None = None,
    ) -> t.Any:
        """Resolve a call of *method* and return its programmed result.

        This is the single entry point every intercepted call goes through.

        Raises
        ------
        UnmatchedInvocationError
            When nothing accepts the call and missing calls are not ignored.
        """
        kwargs = dict(kwargs or {})
        logger.debug(
            "Dispatching %s.%s(%s)", self.name, method, format_args(args, kwargs)
        )
        return self.director(method).resolve(
            args, kwargs, ignore_missing=self.ignore_missing
        )

    def verify(self) -> None:
        """Raise :class:`~obj_mox.errors.VerificationError` on unmet counts."""
        Verifier().verify(self)


def create_mock(name: str = "mock", /, **stubs: object) -> Mock:
    """Return a free-standing :class:`Mock` with optional constant stubs."""
    return Mock(name, **stubs)


__all__ = ["Mock", "MockMethod", "create_mock"]
