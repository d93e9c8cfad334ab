"""Accumulating validation: gather every independent failure.

``apply`` inspects both operands and merges the errors of two failures with
:func:`verdict.semigroup.append`. There is deliberately no ``bind``: a
dependent step would have to skip its right-hand side on failure, losing the
errors this type exists to collect. Convert with :meth:`AccValidation.to_validation`
when a workflow needs dependent steps.

Examples:
    >>> AccFailure(["f1"]).apply(AccFailure(["f2"]))
    AccFailure(error=['f1', 'f2'])
    >>> AccSuccess(lambda n: n + 1).apply(AccSuccess(7))
    AccSuccess(value=8)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import dataclasses
import typing

from verdict._base import Outcome
from verdict.errors import IncompatibleOutcomeError
from verdict.semigroup import append

if typing.TYPE_CHECKING:
    from verdict.short_circuit import Validation


class AccValidation[E, A](Outcome[E, A]):
    """An error ``E`` or a value ``A`` whose parallel combination accumulates errors."""

    __slots__ = ()

    @staticmethod
    def _success(value: typing.Any) -> AccSuccess[typing.Any, typing.Any]:
        return AccSuccess(value)

    @staticmethod
    def _failure(error: typing.Any) -> AccFailure[typing.Any, typing.Any]:
        return AccFailure(error)

    def apply[B](
        self: AccValidation[E, Callable[[A], B]], other: AccValidation[E, A]
    ) -> AccValidation[E, B]:
        """Apply a wrapped function to a wrapped value, merging both failures.

        | self          | other         | result             |
        |---------------|---------------|--------------------|
        | AccFailure e1 | AccFailure e2 | AccFailure(e1 + e2)|
        | AccFailure e1 | AccSuccess _  | AccFailure(e1)     |
        | AccSuccess _  | AccFailure e2 | AccFailure(e2)     |
        | AccSuccess f  | AccSuccess a  | AccSuccess(f(a))   |
        """
        match self, other:
            case AccFailure(e1), AccFailure(e2):
                return AccFailure(append(e1, e2))
            case AccFailure(), AccSuccess():
                return self  # type: ignore[return-value]
            case AccSuccess(), AccFailure():
                return other  # type: ignore[return-value]
            case AccSuccess(f), AccSuccess(a):
                return AccSuccess(f(a))
        raise IncompatibleOutcomeError(
            f"Cannot apply {type(self).__name__} to {type(other).__name__}",
            hint="Convert with to_accumulating() before combining",
        )

    def zip_with[B, C](
        self, other: AccValidation[E, B], f: Callable[[A, B], C]
    ) -> AccValidation[E, C]:
        curried = self.map(lambda a: lambda b: f(a, b))
        return curried.apply(other)  # type: ignore[attr-defined]

    def zip[B](self, other: AccValidation[E, B]) -> AccValidation[E, tuple[A, B]]:
        return self.zip_with(other, lambda a, b: (a, b))

    def concat(self, other: AccValidation[E, A]) -> AccValidation[E, A]:
        """Combine two outcomes as values: the first success wins.

        Errors are appended only when both sides failed. Unlike ``alt``, two
        failures do not discard the left error. Two successes keep the left one.
        """
        match self, other:
            case AccFailure(e1), AccFailure(e2):
                return AccFailure(append(e1, e2))
            case AccFailure(), AccSuccess():
                return other
            case AccSuccess(), AccValidation():
                return self
        raise IncompatibleOutcomeError(
            f"Cannot concat {type(self).__name__} with {type(other).__name__}",
            hint="Convert with to_accumulating() before combining",
        )

    def __add__(self, other: AccValidation[E, A]) -> AccValidation[E, A]:
        if not isinstance(other, AccValidation):
            return NotImplemented
        return self.concat(other)

    def to_validation(self) -> Validation[E, A]:
        """Convert to a short-circuiting ``Validation``, keeping tag and payload."""
        from verdict.short_circuit import Failure, Success

        return self.either(Failure, Success)


@dataclasses.dataclass(frozen=True, slots=True)
class AccFailure[E, A](AccValidation[E, A]):
    """A failed accumulating validation carrying its errors."""

    error: E

    def either[R](
        self, on_failure: Callable[[E], R], on_success: Callable[[A], R]
    ) -> R:
        return on_failure(self.error)


@dataclasses.dataclass(frozen=True, slots=True)
class AccSuccess[E, A](AccValidation[E, A]):
    """A successful accumulating validation."""

    value: A

    def either[R](
        self, on_failure: Callable[[E], R], on_success: Callable[[A], R]
    ) -> R:
        return on_success(self.value)


def sequence[E, A](
    outcomes: Iterable[AccValidation[E, A]],
) -> AccValidation[E, list[A]]:
    """Collect successes into a list, or every error appended left to right."""
    result: AccValidation[E, list[A]] = AccSuccess([])
    for outcome in outcomes:
        result = result.zip_with(outcome, lambda xs, x: [*xs, x])
    return result


def validate_all[T, E, A](
    items: Iterable[T], check: Callable[[T], AccValidation[E, A]]
) -> AccValidation[E, list[A]]:
    """Run ``check`` on every item and gather all failures."""
    return sequence(check(item) for item in items)
