"""Associative append for error payloads.

Accumulating validation merges the errors of two failures with ``append``.
Any type with an associative ``+`` qualifies (lists, tuples, strings, or a
custom class implementing ``__add__``); sets and frozensets merge by union.
Associativity is the caller's responsibility and is not checked.
"""

from __future__ import annotations

from typing import Any, Protocol, Self, runtime_checkable

from verdict.errors import SemigroupError


@runtime_checkable
class Semigroup(Protocol):
    """A type whose values combine with an associative ``+``."""

    def __add__(self, other: Self, /) -> Self: ...


def append[E](left: E, right: E) -> E:
    """Append two error payloads, ``left`` first.

    Raises:
        SemigroupError: When the payloads cannot be combined.
    """
    if isinstance(left, (set, frozenset)) and isinstance(right, (set, frozenset)):
        return left | right  # type: ignore[return-value]
    if not isinstance(left, Semigroup):
        raise SemigroupError(
            f"Cannot append errors of type {type(left).__name__}",
            hint="Accumulate errors in a list, tuple, str or a type defining __add__",
        )
    try:
        combined: Any = left + right  # type: ignore[operator]
    except TypeError as exc:
        raise SemigroupError(
            f"Cannot append {type(left).__name__} and {type(right).__name__}",
            hint="Both failures must carry the same error container type",
        ) from exc
    return combined
