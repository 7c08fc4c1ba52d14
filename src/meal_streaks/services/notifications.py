"""Edge detection for reward notifications."""

from meal_streaks.domain.rewards import RewardState, ShieldNotification

DEFAULT_DISPLAY_SECONDS = 3


def shield_earned(previous: RewardState | None, current: RewardState) -> bool:
    """Return True when the shield flag flips from False to True."""
    if previous is None:
        return False
    return not previous.has_shield and current.has_shield


def detect_shield_notification(
    previous: RewardState | None,
    current: RewardState,
    display_seconds: int = DEFAULT_DISPLAY_SECONDS,
) -> ShieldNotification | None:
    """Return a notification for a newly earned shield, if any."""
    if not shield_earned(previous, current):
        return None
    return ShieldNotification(display_seconds=display_seconds)
