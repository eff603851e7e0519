"""The absorbing ``UNDEFINED`` placeholder value."""

from __future__ import annotations

import typing as t


class Undefined:
    """Placeholder returned for intentionally unknown values.

    Every operation on the placeholder yields the placeholder again, so code
    under test can chain attribute access, calls, indexing, and arithmetic on
    it without failing. Only one instance ever exists.
    """

    __slots__ = ()

    _instance: t.ClassVar[Undefined | None] = None

    def __new__(cls) -> Undefined:
        """Return the shared instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> Undefined:
        return self

    def __getattr__(self, name: str) -> Undefined:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self

    def __setattr__(self, name: str, value: object) -> None:
        """Ignore attribute assignment."""

    def __delattr__(self, name: str) -> None:
        """Ignore attribute deletion."""

    def __call__(self, *args: object, **kwargs: object) -> Undefined:
        return self

    def __getitem__(self, key: object) -> Undefined:
        return self

    def __setitem__(self, key: object, value: object) -> None:
        """Ignore item assignment."""

    def __iter__(self) -> t.Iterator[t.Any]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return other is self

    def __ne__(self, other: object) -> bool:
        return other is not self

    def __hash__(self) -> int:
        return id(type(self))

    def __enter__(self) -> Undefined:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def _absorb(self, *args: object) -> Undefined:
        return self

    __add__ = __radd__ = __sub__ = __rsub__ = _absorb
    __mul__ = __rmul__ = __truediv__ = __rtruediv__ = _absorb
    __floordiv__ = __rfloordiv__ = __mod__ = __rmod__ = _absorb
    __pow__ = __rpow__ = __matmul__ = __rmatmul__ = _absorb
    __and__ = __rand__ = __or__ = __ror__ = __xor__ = __rxor__ = _absorb
    __lshift__ = __rlshift__ = __rshift__ = __rrshift__ = _absorb
    __neg__ = __pos__ = __abs__ = __invert__ = _absorb
    __lt__ = __le__ = __gt__ = __ge__ = _absorb  # type: ignore[assignment]


UNDEFINED: t.Final = Undefined()


def is_undefined(value: object) -> bool:
    """Return ``True`` when *value* is the ``UNDEFINED`` placeholder."""
    return value is UNDEFINED


__all__ = ["UNDEFINED", "Undefined", "is_undefined"]
