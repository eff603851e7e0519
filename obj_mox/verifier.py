"""Verification of expectation call counts."""

from __future__ import annotations

import logging
import typing as t

from .errors import UnmetExpectation, VerificationError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .mock import Mock

logger = logging.getLogger(__name__)


class Verifier:
    """Check that each expectation was met the expected number of times.

    Every unmet expectation across every mock is collected into a single
    :class:`~obj_mox.errors.VerificationError`. Expectations with a minimum
    of zero never fail for being unused. Verifying mid-test is allowed and
    reflects the calls observed so far.
    """

    def failures(self, *mocks: Mock) -> list[UnmetExpectation]:
        """Return the unmet expectations of *mocks* in registration order."""
        found: list[UnmetExpectation] = []
        for mock in mocks:
            for director in mock.directors.values():
                found.extend(
                    UnmetExpectation(mock.name, exp)
                    for exp in director.expectations
                    if not exp.satisfied
                )
        return found

    def verify(self, *mocks: Mock) -> None:
        """Raise :class:`VerificationError` if any expectation is unmet."""
        failures = self.failures(*mocks)
        if failures:
            logger.debug(
                "Verification found %d unmet expectation(s) across %d mock(s)",
                len(failures),
                len(mocks),
            )
            raise VerificationError(failures)
        logger.debug("Verified %d mock(s)", len(mocks))


def verify(*mocks: Mock) -> None:
    """Verify *mocks* with a fresh :class:`Verifier`."""
    Verifier().verify(*mocks)


__all__ = ["Verifier", "verify"]
