"""Pytest configuration and fixtures.

Provides environment isolation and shared test doubles. Fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import pytest

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CallCounter:
    """Records how often a step ran; use to prove a step was skipped."""

    calls: int = 0
    seen: list[Any] = field(default_factory=list)

    def record(self, value: Any = None) -> None:
        self.calls += 1
        self.seen.append(value)


@pytest.fixture
def counter() -> CallCounter:
    """A fresh call counter (not autouse)."""
    return CallCounter()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_verdict_env(request, monkeypatch):
    """Clear VERDICT_* variables so settings resolve to defaults.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("VERDICT_"):
            monkeypatch.delenv(key, raising=False)
