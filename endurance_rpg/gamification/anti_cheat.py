"""
Anti-cheat checks

A flagged activity is vetoed outright: it earns no XP, no streak credit
and no quest credit.
"""

import logging

from endurance_rpg.config import DEFAULT_GAME_CONFIG, GameConfig
from endurance_rpg.gamification.xp_system import ActivityClass, classify_activity
from endurance_rpg.models.activity import ActivityRecord

logger = logging.getLogger(__name__)


def average_speed_kmh(activity: ActivityRecord) -> float:
    """Average moving speed in km/h (0 when distance or moving time is 0)"""
    if activity.distance_meters == 0 or activity.moving_time_seconds == 0:
        return 0.0
    return (activity.distance_meters / 1000) / (activity.moving_time_seconds / 3600)


def is_suspicious(activity: ActivityRecord, config: GameConfig = DEFAULT_GAME_CONFIG) -> bool:
    """
    Detect implausible activities

    Only running activities are checked: a run faster than the configured
    maximum speed is flagged. Activities without distance or moving time
    are never flagged.
    """
    if activity.distance_meters == 0 or activity.moving_time_seconds == 0:
        return False

    if classify_activity(activity.type, config) is not ActivityClass.RUNNING:
        return False

    speed = average_speed_kmh(activity)
    if speed > config.max_running_speed_kmh:
        logger.warning(
            f"Suspicious speed for activity {activity.id}: {speed:.1f} km/h "
            f"(max {config.max_running_speed_kmh} km/h)"
        )
        return True
    return False
