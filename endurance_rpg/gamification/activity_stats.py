"""Lifetime activity totals"""

import logging
from typing import Optional

from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.stats import UserStats

logger = logging.getLogger(__name__)


def apply_activity_to_stats(
    stats: Optional[UserStats],
    activity: ActivityRecord,
    increment: bool = True
) -> UserStats:
    """
    Add an activity to (or remove it from) a user's totals

    Removing never takes a total below zero. The last activity timestamp
    moves forward on add and is left alone on remove.
    """
    stats = stats or UserStats()
    sign = 1 if increment else -1

    updated = UserStats(
        total_distance_meters=max(0.0, stats.total_distance_meters + sign * activity.distance_meters),
        total_moving_time_seconds=max(0.0, stats.total_moving_time_seconds + sign * activity.moving_time_seconds),
        total_elevation_gain_meters=max(0.0, stats.total_elevation_gain_meters + sign * activity.elevation_gain_meters),
        activities_count=max(0, stats.activities_count + sign),
        last_activity_timestamp=activity.start_timestamp if increment else stats.last_activity_timestamp,
    )

    logger.debug(f"Stats {'added' if increment else 'removed'} activity {activity.id}: {updated.activities_count} activities")
    return updated
