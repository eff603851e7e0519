"""Shared code under test for the runnable examples."""

from __future__ import annotations

import typing as t


class QuoteClient:
    """Fetch stock quotes from a database connection."""

    def __init__(self, db: t.Any) -> None:
        self.db = db

    def quotes(self, symbols: t.Iterable[str]) -> dict[str, float]:
        """Return a quote per symbol, wrapped in a database session."""
        self.db.startup()
        try:
            return {symbol: self.db.query(symbol) for symbol in symbols}
        finally:
            self.db.finish()


class Thermostat:
    """Small collaborator whose methods are partially mocked."""

    def read(self) -> float:
        """Return the current temperature."""
        msg = "no sensor attached"
        raise RuntimeError(msg)

    def describe(self) -> str:
        """Return a human readable reading."""
        return f"{self.read():.1f} C"
