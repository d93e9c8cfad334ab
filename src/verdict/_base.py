"""Behavior shared by both validation families.

``AccValidation`` and ``Validation`` are closed two-variant sums with the same
shape. Everything that does not depend on how failures combine lives here:
functor and bifunctor mapping, folds, traversals, choice, ordering.

Each concrete variant implements :meth:`Outcome.either`; each family supplies
``_success``/``_failure`` so derived values stay in the same family.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
import typing

from verdict._validation import _require_callable

if typing.TYPE_CHECKING:
    from verdict.effects import Applicative


class Outcome[E, A]:
    """Either an error ``E`` or a value ``A``; immutable once built."""

    __slots__ = ()

    # --- family hooks ---

    @staticmethod
    def _success(value: typing.Any) -> Outcome[typing.Any, typing.Any]:
        raise NotImplementedError

    @staticmethod
    def _failure(error: typing.Any) -> Outcome[typing.Any, typing.Any]:
        raise NotImplementedError

    def either[R](
        self, on_failure: Callable[[E], R], on_success: Callable[[A], R]
    ) -> R:
        """Collapse the outcome by applying the handler for its tag."""
        raise NotImplementedError

    # --- inspection ---

    @property
    def is_success(self) -> bool:
        return self.either(lambda _: False, lambda _: True)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    def value_or(self, default: A) -> A:
        return self.either(lambda _: default, lambda a: a)

    def __iter__(self) -> Iterator[A]:
        # Foldable view: a success is a one-item container, a failure is empty.
        if self.is_success:
            yield self.either(_unreachable, lambda a: a)

    # --- functor / bifunctor ---

    def map[B](self, f: Callable[[A], B]) -> Outcome[E, B]:
        """Transform the success value; a failure passes through unchanged."""
        return self.either(  # type: ignore[return-value]
            lambda _: self, lambda a: self._success(f(a))
        )

    def map_failure[F](self, f: Callable[[E], F]) -> Outcome[F, A]:
        return self.either(  # type: ignore[return-value]
            lambda e: self._failure(f(e)), lambda _: self
        )

    def bimap[F, B](
        self, on_failure: Callable[[E], F], on_success: Callable[[A], B]
    ) -> Outcome[F, B]:
        return self.either(
            lambda e: self._failure(on_failure(e)),
            lambda a: self._success(on_success(a)),
        )  # type: ignore[return-value]

    # --- folds ---

    def fold[R](self, f: Callable[[A, R], R], initial: R) -> R:
        """Right fold over the success value; a failure yields ``initial``."""
        return self.either(lambda _: initial, lambda a: f(a, initial))

    def bifold[R](
        self,
        on_failure: Callable[[E, R], R],
        on_success: Callable[[A, R], R],
        initial: R,
    ) -> R:
        return self.either(
            lambda e: on_failure(e, initial), lambda a: on_success(a, initial)
        )

    # --- traversals ---

    def traverse(
        self, f: Callable[[A], typing.Any], applicative: Applicative
    ) -> typing.Any:
        """Run ``f`` on the success value inside ``applicative``.

        A failure is lifted unchanged with ``applicative.pure``.
        """
        return self.either(
            lambda _: applicative.pure(self),
            lambda a: applicative.map(f(a), self._success),
        )

    def bitraverse(
        self,
        on_failure: Callable[[E], typing.Any],
        on_success: Callable[[A], typing.Any],
        applicative: Applicative,
    ) -> typing.Any:
        return self.either(
            lambda e: applicative.map(on_failure(e), self._failure),
            lambda a: applicative.map(on_success(a), self._success),
        )

    # --- choice ---

    def alt(
        self, other: Outcome[E, A] | Callable[[], Outcome[E, A]]
    ) -> Outcome[E, A]:
        """Return the leftmost success.

        ``other`` may be a zero-argument callable; it is only called when this
        outcome is a failure. Errors are never merged here, unlike ``concat``
        on accumulating validations.
        """
        if self.is_success:
            return self
        if isinstance(other, Outcome):
            return other
        _require_callable(other, "other")
        return other()

    def __or__(self, other: Outcome[E, A]) -> Outcome[E, A]:
        return self.alt(other)

    def ensure(self, predicate: Callable[[A], bool], error: E) -> Outcome[E, A]:
        """Turn a success failing ``predicate`` into a failure of ``error``."""
        _require_callable(predicate, "predicate")
        return self.either(
            lambda _: self,
            lambda a: self if predicate(a) else self._failure(error),
        )  # type: ignore[return-value]

    # --- ordering: failures sort before successes, then by payload ---

    def _sort_key(self) -> tuple[int, typing.Any]:
        return self.either(lambda e: (0, e), lambda a: (1, a))

    def _comparable(self, other: object) -> bool:
        return (
            isinstance(other, Outcome)
            and type(other)._success is type(self)._success
        )

    def __lt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() < other._sort_key()  # type: ignore[attr-defined]

    def __le__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() <= other._sort_key()  # type: ignore[attr-defined]

    def __gt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() > other._sort_key()  # type: ignore[attr-defined]

    def __ge__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._sort_key() >= other._sort_key()  # type: ignore[attr-defined]


def _unreachable(_: object) -> typing.NoReturn:
    raise AssertionError("unreachable")
