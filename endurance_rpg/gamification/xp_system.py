"""
XP and Leveling System

Turns activities into XP and XP into levels and tiers.

Leveling Curve (quadratic):
- XP required to reach level L = floor(A × L² + B × L), 0 for L <= 1
- Defaults A=100, B=300: level 2 at 1000 XP, level 3 at 1800 XP, level 10 at 13000 XP

Tiers:
- Level 1-9: Novice
- Level 10-24: Apprentice
- Level 25-49: Expert
- Level 50+: Master

XP Award Rules (per activity):
- Distance activities: km × per-km rate for the activity class
- Time activities (workout, yoga/other): minutes × per-minute rate
- Elevation: meters gained × per-meter rate, added to every activity
- Streak bonus: floor(base × (multiplier - 1)) while a streak is active
"""

import logging
import math
from enum import Enum
from typing import Optional

from endurance_rpg.config import DEFAULT_GAME_CONFIG, GameConfig
from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.game import CharacterTier, LevelInfo

logger = logging.getLogger(__name__)


class ActivityClass(str, Enum):
    """Activity classes, listed in classification order"""
    RUNNING = "running"
    WALKING = "walking"
    XC_SKI = "xc_ski"
    DOWNHILL_SKI = "downhill_ski"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    WORKOUT = "workout"
    YOGA = "yoga"


# Activity class -> XPRates field
DISTANCE_RATES = {
    ActivityClass.RUNNING: "running_km",
    ActivityClass.WALKING: "walking_km",
    ActivityClass.XC_SKI: "xc_ski_km",
    ActivityClass.DOWNHILL_SKI: "downhill_ski_km",
    ActivityClass.CYCLING: "cycling_km",
    ActivityClass.SWIMMING: "swim_km",
}

TIME_RATES = {
    ActivityClass.WORKOUT: "workout_min",
    ActivityClass.YOGA: "yoga_min",
}


# ============================================================================
# Leveling
# ============================================================================

def xp_required_for_level(level: int, config: GameConfig = DEFAULT_GAME_CONFIG) -> int:
    """Total XP needed to reach `level` (0 for level 1 and below)"""
    if level <= 1:
        return 0
    return math.floor(config.leveling_a * level ** 2 + config.leveling_b * level)


def calculate_level_from_xp(total_xp: int, config: GameConfig = DEFAULT_GAME_CONFIG) -> LevelInfo:
    """
    Calculate level and progress within the level from total XP

    Negative totals resolve to level 1 with no progress.

    Returns:
        LevelInfo with the level, XP earned inside it, and the XP span of the level
    """
    total_xp = max(0, total_xp)
    level = 1
    consumed = 0

    while True:
        next_threshold = xp_required_for_level(level + 1, config)
        if total_xp < next_threshold:
            break
        consumed = next_threshold
        level += 1

    return LevelInfo(
        level=level,
        current_level_xp=total_xp - consumed,
        next_level_xp_required=xp_required_for_level(level + 1, config) - consumed,
    )


def get_character_tier(level: int, config: GameConfig = DEFAULT_GAME_CONFIG) -> CharacterTier:
    """Determine character tier from level"""
    if level >= config.master_level:
        return CharacterTier.MASTER
    if level >= config.expert_level:
        return CharacterTier.EXPERT
    if level >= config.apprentice_level:
        return CharacterTier.APPRENTICE
    return CharacterTier.NOVICE


# ============================================================================
# Activity XP
# ============================================================================

def classify_activity(activity_type: str, config: GameConfig = DEFAULT_GAME_CONFIG) -> Optional[ActivityClass]:
    """
    Match an activity type against the configured type sets

    First matching class wins. Unknown types return None.
    """
    for activity_class in ActivityClass:
        if activity_type in getattr(config.activity_types, activity_class.value):
            return activity_class
    return None


def calculate_base_xp(activity: ActivityRecord, config: GameConfig = DEFAULT_GAME_CONFIG) -> int:
    """
    Calculate XP for an activity before any bonuses

    Distance-based classes earn per km, time-based classes per minute.
    Unknown types earn nothing for distance/time but still get the
    elevation bonus.
    """
    activity_class = classify_activity(activity.type, config)
    rates = config.rates
    activity_xp = 0.0

    if activity_class in DISTANCE_RATES and activity.distance_meters > 0:
        activity_xp = (activity.distance_meters / 1000) * getattr(rates, DISTANCE_RATES[activity_class])
    elif activity_class in TIME_RATES and activity.moving_time_seconds > 0:
        activity_xp = (activity.moving_time_seconds / 60) * getattr(rates, TIME_RATES[activity_class])
    elif activity_class is None:
        logger.debug(f"Unknown activity type '{activity.type}' for activity {activity.id}, elevation XP only")

    elevation_xp = activity.elevation_gain_meters * rates.elevation_m

    return math.floor(activity_xp + elevation_xp)


def calculate_streak_bonus(base_xp: int, streak_active: bool, config: GameConfig = DEFAULT_GAME_CONFIG) -> int:
    """Bonus XP granted on top of base XP while a streak is active"""
    if not streak_active:
        return 0
    return math.floor(base_xp * (config.streak_bonus_multiplier - 1))
