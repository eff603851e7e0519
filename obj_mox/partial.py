"""Partial mocks: replace selected methods on a real object."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

from .errors import ObjMoxError
from .mock import Mock

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation
    from .space import MockSpace

logger = logging.getLogger(__name__)

_MISSING = object()


@dc.dataclass(frozen=True, slots=True)
class _SavedAttribute:
    name: str
    original: object


class PartialMock:
    """Route selected methods of *target* through a :class:`Mock`.

    Only the methods named via :meth:`expect` are replaced; every other
    attribute keeps its real behaviour. When *target* is a class, the
    replacement is installed as a static method so both the class and its
    instances reach the mock without a bound ``self``. :meth:`restore` puts
    the original attributes back.
    """

    def __init__(self, target: object, *, space: MockSpace | None = None) -> None:
        self.target = target
        self.mock = Mock(_display_name(target), space=space)
        self._saved: dict[str, _SavedAttribute] = {}

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"<PartialMock {self.mock.name}>"

    @property
    def replaced(self) -> list[str]:
        """Return the names currently routed through the mock."""
        return list(self._saved)

    def expect(self, method: str) -> Expectation:
        """Replace *method* on the target and return a new expectation for it."""
        if method not in self._saved:
            self._install(method)
        return self.mock.expect(method)

    should_receive = expect

    def verify(self) -> None:
        """Verify the expectations registered through this partial mock."""
        self.mock.verify()

    def restore(self) -> None:
        """Put every replaced attribute back on the target."""
        for saved in reversed(list(self._saved.values())):
            if saved.original is _MISSING:
                delattr(self.target, saved.name)
            else:
                setattr(self.target, saved.name, saved.original)
            logger.debug("Restored %s.%s", self.mock.name, saved.name)
        self._saved.clear()

    def __enter__(self) -> PartialMock:
        """Return ``self``; :meth:`restore` runs on exit."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Restore the target's original attributes."""
        self.restore()

    def _install(self, method: str) -> None:
        namespace = getattr(self.target, "__dict__", None)
        original = _MISSING
        if namespace is not None and method in namespace:
            original = namespace[method]
        mock = self.mock

        def replacement(*args: object, **kwargs: object) -> t.Any:
            return mock.dispatch(method, args, kwargs)

        replacement.__name__ = method
        stub: object = replacement
        if isinstance(self.target, type):
            stub = staticmethod(replacement)
        try:
            setattr(self.target, method, stub)
        except (AttributeError, TypeError) as exc:
            msg = f"cannot replace {method!r} on {self.target!r}: {exc}"
            raise ObjMoxError(msg) from exc
        self._saved[method] = _SavedAttribute(method, original)
        logger.debug("Replaced %s.%s with a mock dispatcher", self.mock.name, method)


def _display_name(target: object) -> str:
    if isinstance(target, type):
        return target.__qualname__
    name = getattr(target, "__name__", None)
    if isinstance(name, str):
        return name
    return type(target).__qualname__


__all__ = ["PartialMock"]
