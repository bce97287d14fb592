"""
Streak Tracking System

Counts consecutive days with at least one activity.

Logic:
- First activity ever: streak of 1, not yet active
- Same day as the last activity: count unchanged
- Next day: count + 1
- Gap of more than one day: reset to 1
- Activity dated before the last one: treated as a broken streak, reset to 1

A streak becomes active (and earns the XP bonus) once it reaches the
configured threshold.
"""

from typing import Optional
from datetime import datetime
import logging

from endurance_rpg.config import DEFAULT_GAME_CONFIG, GameConfig
from endurance_rpg.models.game import StreakResult
from endurance_rpg.utils.datetime_helpers import days_between

logger = logging.getLogger(__name__)


def update_streak(
    last_activity_timestamp: Optional[datetime],
    current_streak_count: int,
    activity_timestamp: datetime,
    config: GameConfig = DEFAULT_GAME_CONFIG
) -> StreakResult:
    """
    Compute streak state after an activity

    Day difference is the number of whole 24h periods between the two
    timestamps, floored.

    Args:
        last_activity_timestamp: Start of the previous activity (None if none yet)
        current_streak_count: Stored streak count
        activity_timestamp: Start of the new activity
        config: Game configuration (streak threshold)

    Returns:
        StreakResult with the new count and whether the bonus is active
    """
    threshold = config.streak_threshold

    # First activity
    if last_activity_timestamp is None:
        return StreakResult(streak_count=1, streak_active=False)

    days_diff = days_between(last_activity_timestamp, activity_timestamp)

    if days_diff == 0:
        return StreakResult(
            streak_count=current_streak_count,
            streak_active=current_streak_count >= threshold,
        )

    if days_diff == 1:
        new_streak = current_streak_count + 1
        return StreakResult(streak_count=new_streak, streak_active=new_streak >= threshold)

    if days_diff < 0:
        logger.info(
            f"Activity at {activity_timestamp.isoformat()} predates the last one "
            f"({last_activity_timestamp.isoformat()}), resetting streak of {current_streak_count}"
        )
    else:
        logger.info(f"Streak broken after {days_diff} days. Was {current_streak_count}")

    return StreakResult(streak_count=1, streak_active=False)
