"""Short-circuiting validation interleaved with an external effect.

An ``EffectfulValidation`` wraps one computation of an effect's carrier type
that yields a ``Validation`` when run. Sequencing, combination and execution
are delegated to the effect object (see :mod:`verdict.effects`); this module
only decides which computations run:

- ``apply`` always runs both computations, then keeps the first failure.
- ``alt`` runs the second computation only if the first one failed.
- ``bind`` runs the continuation only if the first one succeeded.

Only the short-circuiting policy exists at this layer; there is no effectful
accumulating validation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import typing

from verdict._validation import _require_callable
from verdict.config import current_settings
from verdict.effects import Applicative, Effect, FoldableEffect, TraversableEffect
from verdict.errors import EffectMismatchError, UnsupportedEffectError
from verdict.short_circuit import Failure, Success, Validation

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EffectfulValidation[E, A]:
    """A computation in ``effect`` producing a ``Validation[E, A]``."""

    effect: Effect
    computation: typing.Any

    # --- construction ---

    @classmethod
    def from_validation(
        cls, effect: Effect, validation: Validation[E, A]
    ) -> EffectfulValidation[E, A]:
        return cls(effect, effect.pure(validation))

    @classmethod
    def lift(cls, effect: Effect, computation: typing.Any) -> EffectfulValidation[E, A]:
        """Treat every result of ``computation`` as a success."""
        return cls(effect, effect.map(computation, Success))

    def run(self) -> typing.Any:
        """Execute the wrapped computation with the effect's own semantics."""
        return self.effect.run(self.computation)

    def _same_effect(self, other: EffectfulValidation[typing.Any, typing.Any]) -> None:
        """Reject operands whose computations this effect cannot run.

        Different effect classes never mix. Two instances of one class that
        differ only in configuration (e.g. ``AsyncEffect`` settings) mix when
        ``strict_effects`` is off; the left operand's effect is used.
        """
        if other.effect == self.effect:
            return
        if type(other.effect) is not type(self.effect):
            raise EffectMismatchError(
                f"Cannot combine {self.effect.name!r} and "
                f"{other.effect.name!r} validations",
                hint="Both operands must be built on the same kind of effect",
            )
        if current_settings().strict_effects:
            raise EffectMismatchError(
                f"Cannot combine {self.effect.name!r} validations with "
                "different configurations",
                hint="Build both operands with one effect instance, or set "
                "VERDICT_STRICT_EFFECTS=false",
            )

    # --- functor / bifunctor ---

    def map[B](self, f: Callable[[A], B]) -> EffectfulValidation[E, B]:
        return EffectfulValidation(
            self.effect, self.effect.map(self.computation, lambda v: v.map(f))
        )

    def map_failure[F](self, f: Callable[[E], F]) -> EffectfulValidation[F, A]:
        return EffectfulValidation(
            self.effect, self.effect.map(self.computation, lambda v: v.map_failure(f))
        )

    def bimap[F, B](
        self, on_failure: Callable[[E], F], on_success: Callable[[A], B]
    ) -> EffectfulValidation[F, B]:
        return EffectfulValidation(
            self.effect,
            self.effect.map(
                self.computation, lambda v: v.bimap(on_failure, on_success)
            ),
        )

    # --- parallel combination ---

    def apply[B](
        self: EffectfulValidation[E, Callable[[A], B]],
        other: EffectfulValidation[E, A],
    ) -> EffectfulValidation[E, B]:
        """Run both computations, then combine with ``Validation.apply``."""
        self._same_effect(other)
        return EffectfulValidation(
            self.effect,
            self.effect.map2(
                self.computation, other.computation, lambda vf, va: vf.apply(va)
            ),
        )

    def zip_with[B, C](
        self, other: EffectfulValidation[E, B], f: Callable[[A, B], C]
    ) -> EffectfulValidation[E, C]:
        self._same_effect(other)
        return EffectfulValidation(
            self.effect,
            self.effect.map2(
                self.computation, other.computation, lambda va, vb: va.zip_with(vb, f)
            ),
        )

    def zip[B](
        self, other: EffectfulValidation[E, B]
    ) -> EffectfulValidation[E, tuple[A, B]]:
        return self.zip_with(other, lambda a, b: (a, b))

    # --- choice and sequencing ---

    def alt(
        self,
        other: EffectfulValidation[E, A] | Callable[[], EffectfulValidation[E, A]],
    ) -> EffectfulValidation[E, A]:
        """Run this computation; run ``other`` only if it failed."""
        if isinstance(other, EffectfulValidation):
            self._same_effect(other)

        def _choose(result: Validation[E, A]) -> typing.Any:
            if result.is_success:
                logger.debug("Alternative skipped: first computation succeeded")
                return self.effect.pure(result)
            alternative = other if isinstance(other, EffectfulValidation) else other()
            return alternative.computation

        if not isinstance(other, EffectfulValidation):
            _require_callable(other, "other")
        return EffectfulValidation(
            self.effect, self.effect.bind(self.computation, _choose)
        )

    def __or__(self, other: EffectfulValidation[E, A]) -> EffectfulValidation[E, A]:
        return self.alt(other)

    def bind[B](
        self, f: Callable[[A], EffectfulValidation[E, B]]
    ) -> EffectfulValidation[E, B]:
        """Run this computation; on success run the one ``f`` builds from the value."""
        _require_callable(f, "f")

        def _continue(result: Validation[E, A]) -> typing.Any:
            match result:
                case Failure():
                    logger.debug("Bind short-circuited on failure")
                    return self.effect.pure(result)
                case Success(value):
                    following = f(value)
                    self._same_effect(following)
                    return following.computation
            raise TypeError(
                f"Effect {self.effect.name!r} produced {type(result).__name__}, "
                "expected a Validation"
            )

        return EffectfulValidation(
            self.effect, self.effect.bind(self.computation, _continue)
        )

    # --- folds and traversals (foldable/traversable effects only) ---

    def _foldable(self) -> FoldableEffect:
        if not isinstance(self.effect, FoldableEffect):
            raise UnsupportedEffectError(
                f"Effect {self.effect.name!r} cannot be folded",
                effect=self.effect.name,
                capability="fold",
                hint="Run the computation and fold the resulting Validation",
            )
        return self.effect

    def _traversable(self) -> TraversableEffect:
        if not isinstance(self.effect, TraversableEffect):
            raise UnsupportedEffectError(
                f"Effect {self.effect.name!r} cannot be traversed",
                effect=self.effect.name,
                capability="traverse",
                hint="Run the computation and traverse the resulting Validation",
            )
        return self.effect

    def fold[R](self, f: Callable[[A, R], R], initial: R) -> R:
        return self._foldable().fold(
            self.computation, lambda v, acc: v.fold(f, acc), initial
        )

    def bifold[R](
        self,
        on_failure: Callable[[E, R], R],
        on_success: Callable[[A, R], R],
        initial: R,
    ) -> R:
        return self._foldable().fold(
            self.computation,
            lambda v, acc: v.bifold(on_failure, on_success, acc),
            initial,
        )

    def traverse(
        self, f: Callable[[A], typing.Any], applicative: Applicative
    ) -> typing.Any:
        """Traverse every success value, rebuilding the wrapper in ``applicative``."""
        traversed = self._traversable().traverse(
            self.computation, lambda v: v.traverse(f, applicative), applicative
        )
        return applicative.map(traversed, lambda m: EffectfulValidation(self.effect, m))

    def bitraverse(
        self,
        on_failure: Callable[[E], typing.Any],
        on_success: Callable[[A], typing.Any],
        applicative: Applicative,
    ) -> typing.Any:
        traversed = self._traversable().traverse(
            self.computation,
            lambda v: v.bitraverse(on_failure, on_success, applicative),
            applicative,
        )
        return applicative.map(traversed, lambda m: EffectfulValidation(self.effect, m))
