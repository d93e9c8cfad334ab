"""Settings resolution: defaults, environment, overrides, scoping."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from verdict.config import (
    Settings,
    current_settings,
    load_env,
    resolve_settings,
    settings_scope,
)
from verdict.effectful import EffectfulValidation
from verdict.effects import AsyncEffect, IdentityEffect, ListEffect
from verdict.errors import ConfigurationError, EffectMismatchError
from verdict.short_circuit import Success

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    settings = resolve_settings()
    assert settings.async_combine == "concurrent"
    assert settings.strict_effects is True


def test_env_values_are_coerced(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERDICT_STRICT_EFFECTS", "no")
    monkeypatch.setenv("VERDICT_ASYNC_COMBINE", " sequential ")

    assert load_env() == {"strict_effects": False, "async_combine": "sequential"}
    settings = resolve_settings()
    assert settings.strict_effects is False
    assert settings.async_combine == "sequential"


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERDICT_ASYNC_COMBINE", "sequential")

    settings = resolve_settings({"async_combine": "concurrent"})

    assert settings.async_combine == "concurrent"


def test_invalid_value_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as exc:
        resolve_settings({"async_combine": "parallel"})

    assert "async_combine" in str(exc.value)
    assert exc.value.hint


def test_unknown_env_variable_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERDICT_COLOR", "blue")

    with pytest.warns(UserWarning, match="VERDICT_COLOR"):
        settings = resolve_settings()

    assert settings == Settings()


def test_unknown_override_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="color"):
        resolve_settings({"color": "blue"})


def test_stray_env_variable_does_not_break_async_effect(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("VERDICT_DEBUG", "1")
    monkeypatch.setenv("VERDICT_ASYNC_COMBINE", "sequential")

    with pytest.warns(UserWarning, match="VERDICT_DEBUG"):
        effect = AsyncEffect()

    assert effect.settings.async_combine == "sequential"


def test_dotenv_loading(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("VERDICT_ASYNC_COMBINE=sequential\n")
    monkeypatch.chdir(tmp_path)
    # Registers the variable with monkeypatch so the value .env sets is undone.
    monkeypatch.setenv("VERDICT_ASYNC_COMBINE", "concurrent")
    monkeypatch.delenv("VERDICT_ASYNC_COMBINE")

    settings = resolve_settings(use_dotenv=True)

    assert settings.async_combine == "sequential"


def test_settings_are_frozen() -> None:
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.strict_effects = False  # type: ignore[misc]


def test_scope_overrides_current_settings() -> None:
    scoped = Settings(async_combine="sequential")

    with settings_scope(scoped):
        assert current_settings() is scoped
        assert AsyncEffect().settings is scoped
    assert current_settings().async_combine == "concurrent"


def test_strict_effects_rejects_differently_configured_effects() -> None:
    left = EffectfulValidation.from_validation(
        AsyncEffect(settings=Settings()), Success(1)
    )
    right = EffectfulValidation.from_validation(
        AsyncEffect(settings=Settings(async_combine="sequential")), Success(2)
    )

    with pytest.raises(EffectMismatchError, match="different configurations"):
        left.zip(right)


@pytest.mark.asyncio
async def test_non_strict_effects_allow_differently_configured_effects() -> None:
    left = EffectfulValidation.from_validation(
        AsyncEffect(settings=Settings()), Success(1)
    )
    right = EffectfulValidation.from_validation(
        AsyncEffect(settings=Settings(async_combine="sequential")), Success(2)
    )

    with settings_scope(Settings(strict_effects=False)):
        combined = left.zip(right)

    assert combined.effect == left.effect
    assert await combined.run() == Success((1, 2))


def test_non_strict_effects_still_reject_different_effect_kinds() -> None:
    left = EffectfulValidation.from_validation(IdentityEffect(), Success(1))
    right = EffectfulValidation.from_validation(ListEffect(), Success(2))

    with settings_scope(Settings(strict_effects=False)):
        with pytest.raises(EffectMismatchError, match="same kind of effect"):
            left.zip(right)
