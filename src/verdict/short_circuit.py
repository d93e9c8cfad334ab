"""Short-circuiting validation: the first failure wins.

``Validation`` has the same shape as ``AccValidation`` but never merges
errors, so it needs nothing from the error type. It also supports ``bind``
for dependent steps: once a step fails, later steps are not run at all.

Example:
    def parse_port(raw: str) -> Validation[str, int]:
        return Success(raw).ensure(str.isdigit, "not a number").map(int)

    parse_port("80").bind(
        lambda p: Success(p) if p < 65536 else Failure("out of range")
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import dataclasses
import typing

from verdict._base import Outcome
from verdict._validation import _require_callable
from verdict.errors import IncompatibleOutcomeError

if typing.TYPE_CHECKING:
    from verdict.accumulating import AccValidation


class Validation[E, A](Outcome[E, A]):
    """An error ``E`` or a value ``A`` that propagates only its first failure."""

    __slots__ = ()

    @staticmethod
    def _success(value: typing.Any) -> Success[typing.Any, typing.Any]:
        return Success(value)

    @staticmethod
    def _failure(error: typing.Any) -> Failure[typing.Any, typing.Any]:
        return Failure(error)

    def apply[B](
        self: Validation[E, Callable[[A], B]], other: Validation[E, A]
    ) -> Validation[E, B]:
        """Apply a wrapped function to a wrapped value.

        The left failure wins; the right failure only surfaces when the left
        side succeeded. Errors are never merged.
        """
        match self, other:
            case Failure(), Validation():
                return self  # type: ignore[return-value]
            case Success(), Failure():
                return other  # type: ignore[return-value]
            case Success(f), Success(a):
                return Success(f(a))
        raise IncompatibleOutcomeError(
            f"Cannot apply {type(self).__name__} to {type(other).__name__}",
            hint="Convert with to_validation() before combining",
        )

    def zip_with[B, C](
        self, other: Validation[E, B], f: Callable[[A, B], C]
    ) -> Validation[E, C]:
        curried = self.map(lambda a: lambda b: f(a, b))
        return curried.apply(other)  # type: ignore[attr-defined]

    def zip[B](self, other: Validation[E, B]) -> Validation[E, tuple[A, B]]:
        return self.zip_with(other, lambda a, b: (a, b))

    def bind[B](self, f: Callable[[A], Validation[E, B]]) -> Validation[E, B]:
        """Feed the success value to the next step; a failure skips ``f`` entirely."""
        _require_callable(f, "f")
        return self.either(lambda _: self, f)  # type: ignore[return-value]

    def to_accumulating(self) -> AccValidation[E, A]:
        """Convert to an ``AccValidation`` with the same tag and payload."""
        from verdict.accumulating import AccFailure, AccSuccess

        return self.either(AccFailure, AccSuccess)


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E, A](Validation[E, A]):
    """A failed validation carrying its error."""

    error: E

    def either[R](
        self, on_failure: Callable[[E], R], on_success: Callable[[A], R]
    ) -> R:
        return on_failure(self.error)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[E, A](Validation[E, A]):
    """A successful validation."""

    value: A

    def either[R](
        self, on_failure: Callable[[E], R], on_success: Callable[[A], R]
    ) -> R:
        return on_success(self.value)


def sequence[E, A](outcomes: Iterable[Validation[E, A]]) -> Validation[E, list[A]]:
    """Collect successes into a list, or keep the first failure."""
    result: Validation[E, list[A]] = Success([])
    for outcome in outcomes:
        result = result.zip_with(outcome, lambda xs, x: [*xs, x])
    return result


def validate_all[T, E, A](
    items: Iterable[T], check: Callable[[T], Validation[E, A]]
) -> Validation[E, list[A]]:
    """Run ``check`` on every item; the first failure in item order is kept."""
    return sequence([check(item) for item in items])
