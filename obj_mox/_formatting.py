"""Rendering helpers shared by error messages and the verifier."""

from __future__ import annotations

import typing as t
from textwrap import indent

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation


def format_args(args: t.Sequence[object], kwargs: t.Mapping[str, object]) -> str:
    """Return ``args`` and ``kwargs`` rendered like a Python call."""
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return ", ".join(parts)


def format_call(name: str, args_repr: str) -> str:
    return f"{name}({args_repr})"


def format_cardinality(min_calls: int, max_calls: int | None) -> str:
    """Return a readable description of a call count range."""
    if max_calls is None:
        return f"at least {min_calls}"
    if min_calls == max_calls:
        return f"exactly {min_calls}"
    if min_calls == 0:
        return f"at most {max_calls}"
    return f"between {min_calls} and {max_calls}"


def describe_expectation(exp: Expectation, *, include_count: bool = False) -> str:
    """Return a human readable representation of *exp*."""
    lines = [format_call(exp.method, exp.matcher.describe())]
    if include_count:
        lines.append(
            f"expected calls={format_cardinality(exp.min_calls, exp.max_calls)}"
        )
        lines.append(f"actual calls={exp.call_count}")
    if exp.group is not None:
        lines.append(f"ordered={exp.group.name!r} (rank {exp.group.rank})")
    return "\n".join(lines)


def numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    if not entries:
        return "(none)"
    lines: list[str] = []
    for index, entry in enumerate(entries, start=start):
        entry_lines = entry.splitlines() or [""]
        lines.append(f"{index}. {entry_lines[0]}")
        lines.extend(f"   {extra}" for extra in entry_lines[1:])
    return "\n".join(lines)


def format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)
