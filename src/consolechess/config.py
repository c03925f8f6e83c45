"""Engine options."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

VERIFY_MOVES_ENV = "CONSOLECHESS_VERIFY_MOVES"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """Immutable engine configuration.

    Args:
        verify_moves: Re-run the legality check inside ``make_move`` and
            raise on caller misuse. Costs one extra validation per move.
    """

    verify_moves: bool = False

    # Presets
    @classmethod
    def strict(cls) -> EngineOptions:
        """Verify every executed move."""
        return cls(verify_moves=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineOptions:
        """Build options from ``CONSOLECHESS_*`` environment variables."""
        env = os.environ if environ is None else environ
        raw = env.get(VERIFY_MOVES_ENV, "")
        return cls(verify_moves=raw.strip().lower() in _TRUTHY)
