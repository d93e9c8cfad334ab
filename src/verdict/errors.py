"""Exception hierarchy for verdict.

Failures of a validation are data (``AccFailure``/``Failure``) and are never
raised. The exceptions below signal misuse of the library itself.
"""

from __future__ import annotations


class VerdictError(Exception):
    """Base exception for all verdict errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(VerdictError):
    """Settings validation or resolution failed."""


class SemigroupError(VerdictError):
    """Two error payloads could not be appended."""


class IncompatibleOutcomeError(VerdictError, TypeError):
    """Outcomes of different families were combined."""


class UnsupportedEffectError(VerdictError):
    """The effect lacks a capability the operation needs (fold, traverse)."""

    def __init__(
        self,
        message: str,
        *,
        effect: str,
        capability: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.effect = effect
        self.capability = capability


class EffectMismatchError(VerdictError):
    """Effectful validations built on different effects were combined."""
