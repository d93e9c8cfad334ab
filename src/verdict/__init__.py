"""verdict: accumulating and short-circuiting validation values.

Public API:
    - AccValidation (AccFailure / AccSuccess): gathers every independent failure
    - Validation (Failure / Success): keeps the first failure, supports bind
    - EffectfulValidation: Validation inside an effect (async, deferred, logging)
    - Validate: shared success/failure construction
      (ACCUMULATING, SHORT_CIRCUIT, effectful)
"""

from __future__ import annotations

import logging

from verdict._base import Outcome
from verdict.accumulating import AccFailure, AccSuccess, AccValidation
from verdict.config import Settings, resolve_settings, settings_scope
from verdict.construction import (
    ACCUMULATING,
    SHORT_CIRCUIT,
    AccumulatingConstruction,
    EffectfulConstruction,
    ShortCircuitConstruction,
    Validate,
    effectful,
)
from verdict.effectful import EffectfulValidation
from verdict.effects import (
    AccumulatingApplicative,
    Applicative,
    AsyncEffect,
    Effect,
    IdentityEffect,
    ListEffect,
    ThunkEffect,
    ValidationEffect,
    WriterEffect,
)
from verdict.errors import (
    ConfigurationError,
    EffectMismatchError,
    IncompatibleOutcomeError,
    SemigroupError,
    UnsupportedEffectError,
    VerdictError,
)
from verdict.semigroup import Semigroup, append
from verdict.short_circuit import Failure, Success, Validation

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("verdict")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("verdict").addHandler(logging.NullHandler())

__all__ = [
    "ACCUMULATING",
    "SHORT_CIRCUIT",
    "AccFailure",
    "AccSuccess",
    "AccValidation",
    "AccumulatingApplicative",
    "AccumulatingConstruction",
    "Applicative",
    "AsyncEffect",
    "ConfigurationError",
    "Effect",
    "EffectMismatchError",
    "EffectfulConstruction",
    "EffectfulValidation",
    "Failure",
    "IdentityEffect",
    "IncompatibleOutcomeError",
    "ListEffect",
    "Outcome",
    "Semigroup",
    "SemigroupError",
    "Settings",
    "ShortCircuitConstruction",
    "Success",
    "ThunkEffect",
    "UnsupportedEffectError",
    "Validate",
    "Validation",
    "ValidationEffect",
    "VerdictError",
    "WriterEffect",
    "append",
    "effectful",
    "resolve_settings",
    "settings_scope",
]
