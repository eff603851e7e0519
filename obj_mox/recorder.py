"""Record mode: turn calls on a proxy into expectations on a mock."""

from __future__ import annotations

import logging
import typing as t

from .matchers import ArgsMatching

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation
    from .mock import Mock

logger = logging.getLogger(__name__)


class _RecordingMethod:
    __slots__ = ("_name", "_recorder")

    def __init__(self, recorder: Recorder, name: str) -> None:
        self._recorder = recorder
        self._name = name

    def __call__(self, *args: object, **kwargs: object) -> Expectation:
        return self._recorder.record_call(self._name, args, kwargs)


class Recorder:
    """Proxy whose method calls become expectations on a target mock.

    ``rec.query("CPWR")`` registers ``mock.expect("query").with_args("CPWR")``
    and returns the expectation so modifiers can be chained:
    ``rec.query("CPWR").returns(12.3).once().ordered("queries")``.

    After :meth:`strict` every recorded call compares its arguments for exact
    equality, is ordered after the previous recording, and must happen
    exactly once. This suits capturing a known-good algorithm and replaying
    a new one against it.
    """

    def __init__(self, mock: Mock) -> None:
        self._mock = mock
        self._strict = False

    def __getattr__(self, name: str) -> _RecordingMethod:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return _RecordingMethod(self, name)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"<Recorder for {self._mock!r}>"

    @property
    def mock(self) -> Mock:
        """The mock receiving recorded expectations."""
        return self._mock

    @property
    def is_strict(self) -> bool:
        """Return ``True`` once :meth:`strict` has been called."""
        return self._strict

    def strict(self) -> Recorder:
        """Record every later call with exact arguments, in order, once."""
        self._strict = True
        return self

    should_be_strict = strict

    def record_call(
        self, name: str, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> Expectation:
        """Register an expectation for ``name(*args, **kwargs)``."""
        exp = self._mock.expect(name)
        if self._strict:
            exp.matcher = ArgsMatching.from_values(
                args, kwargs, strict=True, coerce_strict=True
            )
            exp.strict = True
            exp.ordered().once()
        else:
            exp.with_args(*args, **kwargs)
        logger.debug(
            "Recorded %s.%s as expectation #%d", self._mock.name, name, exp.serial
        )
        return exp


__all__ = ["Recorder"]
