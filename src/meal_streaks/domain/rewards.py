"""Domain models for streaks, coins and shields."""

from dataclasses import dataclass

SHIELD_THRESHOLD = 7


@dataclass(frozen=True)
class RewardState:
    """Reward projection derived from the full meal history."""

    current_streak: int
    total_coins: int
    has_shield: bool
    shield_progress: int
    consecutive_greens: int

    @classmethod
    def empty(cls) -> "RewardState":
        """Return the cold-start state."""
        return cls(
            current_streak=0,
            total_coins=0,
            has_shield=False,
            shield_progress=0,
            consecutive_greens=0,
        )


@dataclass(frozen=True)
class ShieldNotification:
    """One-shot signal that a shield was just earned."""

    display_seconds: int
    kind: str = "shield_earned"
    message: str = "Streak Shield Earned!"
