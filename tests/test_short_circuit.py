"""Validation boundary tests: first-failure propagation, bind, conversion."""

from __future__ import annotations

import pytest

from verdict.accumulating import AccFailure, AccSuccess
from verdict.effects import AccumulatingApplicative, ValidationEffect
from verdict.errors import IncompatibleOutcomeError
from verdict.short_circuit import (
    Failure,
    Success,
    Validation,
    sequence,
    validate_all,
)

pytestmark = pytest.mark.unit


def add1(n: int) -> int:
    return n + 1


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        (Failure(["f1"]), Success(7), Failure(["f1"])),
        (Success(add1), Success(7), Success(8)),
        (Success(add1), Failure(["f2"]), Failure(["f2"])),
        (Failure(["f1"]), Failure(["f2"]), Failure(["f1"])),
    ],
)
def test_apply_table(left, right, expected) -> None:
    assert left.apply(right) == expected


def test_apply_needs_no_appendable_error() -> None:
    assert Failure(None).apply(Failure(None)) == Failure(None)


def test_apply_rejects_accumulating_operand() -> None:
    with pytest.raises(IncompatibleOutcomeError):
        Success(add1).apply(AccSuccess(1))  # type: ignore[arg-type]


def test_zip_keeps_first_failure() -> None:
    assert Failure("a").zip(Failure("b")) == Failure("a")
    assert Success(1).zip(Success(2)) == Success((1, 2))


# =============================================================================
# Sequential composition
# =============================================================================


def test_bind_on_success_feeds_the_value() -> None:
    def half(n: int) -> Validation[str, int]:
        return Success(n // 2) if n % 2 == 0 else Failure(f"{n} is odd")

    assert Success(8).bind(half) == Success(4)
    assert Success(8).bind(half).bind(half).bind(half) == Success(1)
    assert Success(8).bind(half).bind(half).bind(half).bind(half) == Failure("1 is odd")


def test_bind_on_failure_never_calls_continuation(counter) -> None:
    def step(n: int) -> Validation[str, int]:
        counter.record(n)
        return Success(n)

    assert Failure("boom").bind(step) == Failure("boom")
    assert counter.calls == 0


def test_bind_stops_at_first_failing_step(counter) -> None:
    def fails(n: int) -> Validation[str, int]:
        counter.record("fails")
        return Failure("stop")

    def later(n: int) -> Validation[str, int]:
        counter.record("later")
        return Success(n)

    assert Success(1).bind(fails).bind(later).bind(later) == Failure("stop")
    assert counter.seen == ["fails"]


def test_bind_requires_callable() -> None:
    with pytest.raises(TypeError):
        Success(1).bind("not callable")  # type: ignore[arg-type]


# =============================================================================
# Choice, folds, traversals
# =============================================================================


def test_alt_returns_leftmost_success(counter) -> None:
    def alternative() -> Validation[str, int]:
        counter.record()
        return Success(9)

    assert Success(1).alt(alternative) == Success(1)
    assert counter.calls == 0
    assert Failure("x").alt(Success(2)) == Success(2)
    assert (Failure("x") | Failure("y")) == Failure("y")


def test_fold_and_bifold() -> None:
    assert Success(2).fold(lambda a, acc: [a, *acc], []) == [2]
    assert Failure("e").fold(lambda a, acc: [a, *acc], []) == []
    assert Failure("e").bifold(lambda e, acc: acc + len(e), lambda a, acc: acc, 1) == 2


def test_traverse_into_accumulating_applicative() -> None:
    applicative = AccumulatingApplicative()

    def checked(n: int):
        return AccSuccess(n) if n > 0 else AccFailure([f"{n} is not positive"])

    assert Success(3).traverse(checked, applicative) == AccSuccess(Success(3))
    assert Success(-1).traverse(checked, applicative) == AccFailure(
        ["-1 is not positive"]
    )
    assert Failure("e").traverse(checked, applicative) == AccSuccess(Failure("e"))


def test_traverse_into_validation_effect() -> None:
    effect = ValidationEffect()
    assert Success(1).traverse(lambda a: Success(a + 1), effect) == Success(Success(2))
    assert Success(1).traverse(lambda a: Failure("inner"), effect) == Failure("inner")


def test_bimap() -> None:
    assert Failure("e").bimap(str.upper, add1) == Failure("E")
    assert Success(1).bimap(str.upper, add1) == Success(2)


# =============================================================================
# Conversion and collections
# =============================================================================


@pytest.mark.parametrize(
    "outcome", [Failure(["e"]), Success(1), Failure(()), Success(None)]
)
def test_round_trip_through_accumulating(outcome) -> None:
    assert outcome.to_accumulating().to_validation() == outcome


def test_to_accumulating_preserves_tag() -> None:
    assert Failure("e").to_accumulating() == AccFailure("e")
    assert Success(1).to_accumulating() == AccSuccess(1)


def test_sequence_keeps_first_failure() -> None:
    assert sequence([Success(1), Failure("a"), Failure("b")]) == Failure("a")
    assert sequence([Success(1), Success(2)]) == Success([1, 2])


def test_validate_all_still_runs_every_check(counter) -> None:
    def positive(n: int) -> Validation[str, int]:
        counter.record(n)
        return Success(n) if n > 0 else Failure(f"{n} is not positive")

    assert validate_all([1, -2, -3], positive) == Failure("-2 is not positive")
    assert counter.seen == [1, -2, -3]
