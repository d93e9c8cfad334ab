"""Settings schema and resolution.

Settings are resolved once (defaults < ``VERDICT_*`` environment < explicit
overrides), validated by a pydantic schema, and frozen. Effects that need
configuration capture a ``Settings`` instance at construction.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
import contextvars
import logging
import os
from typing import Any, Literal
import warnings

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from verdict.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "VERDICT_"

AsyncCombine = Literal["concurrent", "sequential"]


class Settings(BaseModel):
    """Pydantic schema and single source of truth for verdict settings."""

    #: How ``AsyncEffect`` runs both sides of a parallel combination.
    async_combine: AsyncCombine = Field(default="concurrent")
    #: Reject combining effectful validations whose effects differ in settings.
    strict_effects: bool = Field(default=True)

    model_config = {"extra": "forbid", "frozen": True}


_scoped: contextvars.ContextVar[Settings | None] = contextvars.ContextVar(
    "verdict_settings", default=None
)


def _coerce_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def load_env() -> dict[str, Any]:
    """Read ``VERDICT_*`` variables, coercing booleans by schema type.

    Variables that name no setting are skipped with a ``UserWarning``;
    unknown keys passed as explicit overrides are still rejected.
    """
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        info = Settings.model_fields.get(field_name)
        if info is None:
            msg = f"ignoring unknown environment variable {key}"
            logger.warning(msg)
            warnings.warn(f"Configuration: {msg}", UserWarning, stacklevel=2)
            continue
        if info.annotation is bool:
            config[field_name] = _coerce_bool(value)
        else:
            config[field_name] = value.strip()
    return config


def resolve_settings(
    overrides: Mapping[str, Any] | None = None, *, use_dotenv: bool = False
) -> Settings:
    """Resolve and validate settings.

    Args:
        overrides: Programmatic values; these win over the environment.
        use_dotenv: Load the nearest ``.env`` above the working directory
            first; existing variables are not overwritten.

    Raises:
        ConfigurationError: When a resolved value fails validation.
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    merged = {**load_env(), **dict(overrides or {})}
    try:
        settings = Settings.model_validate(merged)
    except ValidationError as exc:
        fields = ", ".join(
            str(err["loc"][0]) for err in exc.errors() if err["loc"]
        )
        raise ConfigurationError(
            f"Invalid verdict settings: {fields or exc}",
            hint="async_combine accepts 'concurrent' or 'sequential'; "
            f"environment variables use the {ENV_PREFIX} prefix",
        ) from exc
    logger.debug("Resolved settings: %s", settings.model_dump())
    return settings


def current_settings() -> Settings:
    """Return the scoped settings, or resolve them from the environment."""
    scoped = _scoped.get()
    return scoped if scoped is not None else resolve_settings()


@contextmanager
def settings_scope(settings: Settings) -> Iterator[Settings]:
    """Make ``settings`` the result of ``current_settings()`` within the block."""
    token = _scoped.set(settings)
    try:
        yield settings
    finally:
        _scoped.reset(token)
