"""Effect objects: explicit stand-ins for a higher-kinded effect parameter.

An effect object knows how to build, sequence, combine and run values of its
carrier type ``M``. ``EffectfulValidation`` never inspects a carrier itself;
it only calls into these operations. Traversals take an ``Applicative``.

Carriers:
    IdentityEffect      the value itself
    ListEffect          a list of alternatives (nondeterminism)
    ThunkEffect         a zero-argument callable, run synchronously
    AsyncEffect         a zero-argument callable returning an awaitable
    WriterEffect        a ``(log, value)`` pair; logs append via ``append``
    ValidationEffect    a short-circuiting ``Validation`` (result-or-error)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable

from verdict._validation import _require_callable
from verdict.accumulating import AccSuccess, AccValidation
from verdict.config import Settings, current_settings
from verdict.errors import SemigroupError
from verdict.semigroup import append
from verdict.short_circuit import Success, Validation

logger = logging.getLogger(__name__)


@runtime_checkable
class Applicative(Protocol):
    """Lift values and combine two independent computations."""

    def pure(self, value: Any) -> Any:
        """Wrap ``value`` in a computation with no effect."""
        ...

    def map(self, computation: Any, f: Callable[[Any], Any]) -> Any:
        """Transform the result of ``computation``."""
        ...

    def map2(self, left: Any, right: Any, f: Callable[[Any, Any], Any]) -> Any:
        """Run both computations and combine their results with ``f``."""
        ...


@runtime_checkable
class Effect(Applicative, Protocol):
    """An applicative that can also sequence dependent computations and run them."""

    name: str

    def bind(self, computation: Any, f: Callable[[Any], Any]) -> Any:
        """Run ``computation``, then the computation ``f`` builds from its result."""
        ...

    def run(self, computation: Any) -> Any:
        """Execute ``computation`` with this effect's own semantics."""
        ...


@runtime_checkable
class FoldableEffect(Protocol):
    def fold(self, computation: Any, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Right fold over every result ``computation`` holds."""
        ...


@runtime_checkable
class TraversableEffect(Protocol):
    def traverse(
        self, computation: Any, f: Callable[[Any], Any], applicative: Applicative
    ) -> Any:
        """Apply ``f`` to every result, collecting effects in ``applicative``."""
        ...


# --- Foldable and traversable effects ---


@dataclass(frozen=True)
class IdentityEffect:
    """No effect: the carrier is the value itself."""

    name: str = "identity"

    def pure(self, value: Any) -> Any:
        return value

    def map(self, computation: Any, f: Callable[[Any], Any]) -> Any:
        return f(computation)

    def map2(self, left: Any, right: Any, f: Callable[[Any, Any], Any]) -> Any:
        return f(left, right)

    def bind(self, computation: Any, f: Callable[[Any], Any]) -> Any:
        return f(computation)

    def run(self, computation: Any) -> Any:
        return computation

    def fold(self, computation: Any, f: Callable[[Any, Any], Any], initial: Any) -> Any:
        return f(computation, initial)

    def traverse(
        self, computation: Any, f: Callable[[Any], Any], applicative: Applicative
    ) -> Any:
        return f(computation)


@dataclass(frozen=True)
class ListEffect:
    """Nondeterminism: a computation is the list of its possible results."""

    name: str = "list"

    def pure(self, value: Any) -> list[Any]:
        return [value]

    def map(self, computation: list[Any], f: Callable[[Any], Any]) -> list[Any]:
        return [f(x) for x in computation]

    def map2(
        self, left: list[Any], right: list[Any], f: Callable[[Any, Any], Any]
    ) -> list[Any]:
        return [f(a, b) for a in left for b in right]

    def bind(self, computation: list[Any], f: Callable[[Any], list[Any]]) -> list[Any]:
        return [y for x in computation for y in f(x)]

    def run(self, computation: list[Any]) -> list[Any]:
        return computation

    def fold(
        self, computation: list[Any], f: Callable[[Any, Any], Any], initial: Any
    ) -> Any:
        acc = initial
        for x in reversed(computation):
            acc = f(x, acc)
        return acc

    def traverse(
        self, computation: list[Any], f: Callable[[Any], Any], applicative: Applicative
    ) -> Any:
        acc = applicative.pure([])
        for x in computation:
            acc = applicative.map2(acc, f(x), lambda xs, y: [*xs, y])
        return acc


@dataclass(frozen=True)
class WriterEffect:
    """Logging effect: a computation is a ``(log, value)`` pair.

    Logs of sequenced or combined computations are appended left to right;
    ``identity`` is the empty log used by ``pure`` and is neutral on either
    side, so ``pure`` results mix with logs of any container type. Two
    non-empty logs must share a container type.
    """

    identity: Any = ()
    name: str = "writer"

    def tell(self, entry: Any) -> tuple[Any, None]:
        """A computation that only records ``entry``."""
        return (entry, None)

    def pure(self, value: Any) -> tuple[Any, Any]:
        return (self.identity, value)

    def _append_logs(self, left: Any, right: Any) -> Any:
        if left == self.identity:
            return right
        if right == self.identity:
            return left
        try:
            return append(left, right)
        except SemigroupError as exc:
            raise SemigroupError(
                f"Cannot append writer logs of type {type(left).__name__} "
                f"and {type(right).__name__}",
                hint="Keep every log in one container type and pass a matching "
                "WriterEffect(identity=...)",
            ) from exc

    def map(
        self, computation: tuple[Any, Any], f: Callable[[Any], Any]
    ) -> tuple[Any, Any]:
        log, value = computation
        return (log, f(value))

    def map2(
        self,
        left: tuple[Any, Any],
        right: tuple[Any, Any],
        f: Callable[[Any, Any], Any],
    ) -> tuple[Any, Any]:
        (log1, a), (log2, b) = left, right
        return (self._append_logs(log1, log2), f(a, b))

    def bind(
        self, computation: tuple[Any, Any], f: Callable[[Any], tuple[Any, Any]]
    ) -> tuple[Any, Any]:
        log1, a = computation
        log2, b = f(a)
        return (self._append_logs(log1, log2), b)

    def run(self, computation: tuple[Any, Any]) -> tuple[Any, Any]:
        return computation

    def fold(
        self, computation: tuple[Any, Any], f: Callable[[Any, Any], Any], initial: Any
    ) -> Any:
        return f(computation[1], initial)

    def traverse(
        self,
        computation: tuple[Any, Any],
        f: Callable[[Any], Any],
        applicative: Applicative,
    ) -> Any:
        log, value = computation
        return applicative.map(f(value), lambda b: (log, b))


@dataclass(frozen=True)
class ValidationEffect:
    """Result-or-error computations: the carrier is a ``Validation``."""

    name: str = "validation"

    def pure(self, value: Any) -> Validation[Any, Any]:
        return Success(value)

    def map(self, computation: Validation[Any, Any], f: Callable[[Any], Any]) -> Any:
        return computation.map(f)

    def map2(
        self,
        left: Validation[Any, Any],
        right: Validation[Any, Any],
        f: Callable[[Any, Any], Any],
    ) -> Validation[Any, Any]:
        return left.zip_with(right, f)

    def bind(
        self, computation: Validation[Any, Any], f: Callable[[Any], Any]
    ) -> Validation[Any, Any]:
        return computation.bind(f)

    def run(self, computation: Validation[Any, Any]) -> Validation[Any, Any]:
        return computation

    def fold(
        self,
        computation: Validation[Any, Any],
        f: Callable[[Any, Any], Any],
        initial: Any,
    ) -> Any:
        return computation.fold(f, initial)

    def traverse(
        self,
        computation: Validation[Any, Any],
        f: Callable[[Any], Any],
        applicative: Applicative,
    ) -> Any:
        return computation.traverse(f, applicative)


@dataclass(frozen=True)
class AccumulatingApplicative:
    """``AccValidation`` as a traversal target; it has no ``bind``."""

    name: str = "accumulating"

    def pure(self, value: Any) -> AccValidation[Any, Any]:
        return AccSuccess(value)

    def map(self, computation: AccValidation[Any, Any], f: Callable[[Any], Any]) -> Any:
        return computation.map(f)

    def map2(
        self,
        left: AccValidation[Any, Any],
        right: AccValidation[Any, Any],
        f: Callable[[Any, Any], Any],
    ) -> AccValidation[Any, Any]:
        return left.zip_with(right, f)


# --- Deferred effects: neither foldable nor traversable ---


@dataclass(frozen=True)
class ThunkEffect:
    """Synchronous deferred computations: zero-argument callables."""

    name: str = "thunk"

    def pure(self, value: Any) -> Callable[[], Any]:
        return lambda: value

    def map(
        self, computation: Callable[[], Any], f: Callable[[Any], Any]
    ) -> Callable[[], Any]:
        _require_callable(computation, "computation")
        return lambda: f(computation())

    def map2(
        self,
        left: Callable[[], Any],
        right: Callable[[], Any],
        f: Callable[[Any, Any], Any],
    ) -> Callable[[], Any]:
        _require_callable(left, "left")
        _require_callable(right, "right")

        def _both() -> Any:
            a = left()
            return f(a, right())

        return _both

    def bind(
        self, computation: Callable[[], Any], f: Callable[[Any], Callable[[], Any]]
    ) -> Callable[[], Any]:
        _require_callable(computation, "computation")
        return lambda: f(computation())()

    def run(self, computation: Callable[[], Any]) -> Any:
        _require_callable(computation, "computation")
        return computation()


type AsyncComputation = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class AsyncEffect:
    """Asynchronous computations: zero-argument callables returning awaitables.

    A computation is started each time it is called, so one wrapped
    computation can be run more than once. Parallel combination awaits both
    sides with ``asyncio.gather`` unless settings ask for ``"sequential"``.

    Example:
        effect = AsyncEffect()
        ev = EffectfulValidation.lift(effect, fetch_user)
        result = await ev.run()
    """

    settings: Settings = field(default_factory=current_settings)
    name: str = "async"

    def pure(self, value: Any) -> AsyncComputation:
        async def _pure() -> Any:
            return value

        return _pure

    def map(
        self, computation: AsyncComputation, f: Callable[[Any], Any]
    ) -> AsyncComputation:
        _require_callable(computation, "computation")

        async def _map() -> Any:
            return f(await computation())

        return _map

    def map2(
        self,
        left: AsyncComputation,
        right: AsyncComputation,
        f: Callable[[Any, Any], Any],
    ) -> AsyncComputation:
        _require_callable(left, "left")
        _require_callable(right, "right")
        mode = self.settings.async_combine

        async def _both() -> Any:
            logger.debug("Combining async computations (%s)", mode)
            if mode == "sequential":
                a = await left()
                b = await right()
            else:
                a, b = await asyncio.gather(left(), right())
            return f(a, b)

        return _both

    def bind(
        self, computation: AsyncComputation, f: Callable[[Any], AsyncComputation]
    ) -> AsyncComputation:
        _require_callable(computation, "computation")

        async def _bind() -> Any:
            return await f(await computation())()

        return _bind

    def run(self, computation: AsyncComputation) -> Awaitable[Any]:
        _require_callable(computation, "computation")
        return computation()
