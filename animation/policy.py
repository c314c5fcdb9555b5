"""
Purpose: Central configuration for route playback.
What it does:

Stores the tunables of the dash animation:

DASH_STEP = 1.0 (offset units removed per tick)
TICK_INTERVAL = 1/60 s (one display frame)
DASH_ARRAY = "20, 20"

Rule: No logic here: just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnimationPolicy:
    """
    Central configuration for the animated route line.
    """

    # --- Motion ---
    # how much the dash offset decreases on every tick
    dash_step: float = 1.0

    # seconds between ticks
    interval_s: float = 1 / 60

    # --- Style handed to the renderer ---
    dash_array: str = "20, 20"
    color: str = "green"
    weight: int = 8
    opacity: float = 0.8

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.dash_step <= 0:
            raise ValueError("dash_step must be > 0")

        if self.interval_s <= 0:
            raise ValueError("interval_s must be > 0")

        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError("opacity must be within [0, 1]")


def default_animation_policy() -> AnimationPolicy:
    """
    Convenience factory for the default policy.
    """
    p = AnimationPolicy()
    p.validate()
    return p
