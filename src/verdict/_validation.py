"""Internal validation helpers shared across verdict modules.

These helpers centralize argument checks so that misuse surfaces with
consistent, field-qualified messages.
"""

from __future__ import annotations

import typing


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Raise ``exc`` with an optional field prefix unless ``condition`` holds."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _require_callable(func: typing.Any, field_name: str) -> None:
    _require(
        condition=callable(func),
        message=f"must be callable, got {type(func).__name__}",
        field_name=field_name,
        exc=TypeError,
    )
