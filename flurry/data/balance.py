"""Balance constants — all tuning knobs in one place.

Tweak these to adjust how upgrade effects compose and what a jump clears.
Effect values in the catalog are data; the rules for reading them live here.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EngineBalance:
    """Tuning for the progression rule engine."""

    # Click power before any upgrade (one click = one snowball)
    base_click_power: float = 1.0

    # Identity values for the remaining derived stats
    base_boost_effectiveness: float = 1.0
    base_icicle_rate: float = 1.0

    # Flat cost reductions accumulate additively and are clamped here so a
    # purchase can never become free or negative.
    cost_reduction_clamp: tuple[float, float] = (0.0, 0.95)

    # Persistence classes wiped by a jump when the caller names none
    jump_reset_classes: tuple[str, ...] = ("boost", "clickMultiplier")

    # How a `multiply` action reads its value, per entry kind:
    #   "increment" → x *= (1 + value)   (0.1 means +10%)
    #   "direct"    → x *= value         (2 means doubled)
    multiply_modes: tuple[tuple[str, str], ...] = (
        ("boost", "increment"),
        ("global", "increment"),
        ("yetiJr", "increment"),
        ("clickMultiplier", "increment"),
        ("legacy", "direct"),
        ("achievementThreshold", "increment"),
        ("achievementEvent", "increment"),
    )

    def multiply_mode_for(self, kind: str) -> str:
        return dict(self.multiply_modes).get(kind, "increment")


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    engine: EngineBalance = field(default_factory=EngineBalance)


# Singleton: import this everywhere
BALANCE = GameBalance()
