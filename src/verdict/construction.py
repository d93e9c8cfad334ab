"""Uniform construction of validation values.

Validator code written against the ``Validate`` protocol builds its results
through ``success``/``failure`` and can be reused with any representation:

    def non_negative(v: Validate, n: int):
        return v.success(n) if n >= 0 else v.failure([f"{n} is negative"])

    non_negative(ACCUMULATING, -1)              # AccFailure(error=['-1 is negative'])
    non_negative(SHORT_CIRCUIT, 3)              # Success(value=3)
    non_negative(effectful(AsyncEffect()), 3)   # EffectfulValidation(...)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from verdict.accumulating import AccFailure, AccSuccess, AccValidation
from verdict.effectful import EffectfulValidation
from verdict.effects import Effect
from verdict.short_circuit import Failure, Success, Validation


@runtime_checkable
class Validate(Protocol):
    """Builds success and failure values of one representation."""

    def success(self, value: Any) -> Any:
        """Construct a success holding ``value``."""
        ...

    def failure(self, error: Any) -> Any:
        """Construct a failure holding ``error``."""
        ...


@dataclass(frozen=True)
class AccumulatingConstruction:
    def success(self, value: Any) -> AccValidation[Any, Any]:
        return AccSuccess(value)

    def failure(self, error: Any) -> AccValidation[Any, Any]:
        return AccFailure(error)

    def empty(self, identity: Any) -> AccValidation[Any, Any]:
        """The neutral failure for ``alt``, holding the error type's identity."""
        return AccFailure(identity)


@dataclass(frozen=True)
class ShortCircuitConstruction:
    def success(self, value: Any) -> Validation[Any, Any]:
        return Success(value)

    def failure(self, error: Any) -> Validation[Any, Any]:
        return Failure(error)

    def empty(self, identity: Any) -> Validation[Any, Any]:
        return Failure(identity)


@dataclass(frozen=True)
class EffectfulConstruction:
    """Builds effectful validations whose computations have no effect of their own."""

    effect: Effect

    def success(self, value: Any) -> EffectfulValidation[Any, Any]:
        return EffectfulValidation.from_validation(self.effect, Success(value))

    def failure(self, error: Any) -> EffectfulValidation[Any, Any]:
        return EffectfulValidation.from_validation(self.effect, Failure(error))

    def empty(self, identity: Any) -> EffectfulValidation[Any, Any]:
        return self.failure(identity)


ACCUMULATING = AccumulatingConstruction()
SHORT_CIRCUIT = ShortCircuitConstruction()


def effectful(effect: Effect) -> EffectfulConstruction:
    return EffectfulConstruction(effect)
