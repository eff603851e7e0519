"""Python-native mock objects with ordered, counted, and matched expectations.

Create a :class:`Mock`, register expectations with :meth:`Mock.expect` (or
record them through :meth:`Mock.record`), exercise the code under test, then
check call counts with :func:`verify`.
"""

from __future__ import annotations

from .comparators import (
    Any,
    Comparator,
    Contains,
    Ducktype,
    Eq,
    HasEntries,
    IsA,
    Predicate,
    Regex,
    StartsWith,
)
from .errors import (
    MisconfiguredExpectationError,
    ObjMoxError,
    OrderingViolationError,
    UnmatchedInvocationError,
    UnmetExpectation,
    VerificationError,
)
from .expectations import Expectation
from .mock import Mock, MockMethod, create_mock
from .ordering import OrderingGroup, OrderingScope
from .partial import PartialMock
from .pytest_plugin import obj_mox as obj_mox_fixture
from .recorder import Recorder
from .space import MockSpace
from .undefined import UNDEFINED, Undefined, is_undefined
from .verifier import Verifier, verify

__all__ = [
    "UNDEFINED",
    "Any",
    "Comparator",
    "Contains",
    "Ducktype",
    "Eq",
    "Expectation",
    "HasEntries",
    "IsA",
    "MisconfiguredExpectationError",
    "Mock",
    "MockMethod",
    "MockSpace",
    "ObjMoxError",
    "OrderingGroup",
    "OrderingScope",
    "OrderingViolationError",
    "PartialMock",
    "Predicate",
    "Recorder",
    "Regex",
    "StartsWith",
    "UnmatchedInvocationError",
    "UnmetExpectation",
    "Undefined",
    "VerificationError",
    "Verifier",
    "create_mock",
    "is_undefined",
    "obj_mox_fixture",
    "verify",
]
