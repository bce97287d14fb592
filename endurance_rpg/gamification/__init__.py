"""
Gamification engine for EnduranceRPG

Turns logged activities into character progression:
- XP and leveling (quadratic curve, four tiers)
- Anti-cheat speed veto
- Consecutive-day streaks with an XP bonus
- Weekday-scoped daily quests
- Daily XP cap
"""

from endurance_rpg.gamification.xp_system import (
    calculate_base_xp,
    calculate_level_from_xp,
    get_character_tier,
    xp_required_for_level,
)
from endurance_rpg.gamification.anti_cheat import is_suspicious
from endurance_rpg.gamification.streak_system import update_streak
from endurance_rpg.gamification.quests import check_quests, get_active_quests
from endurance_rpg.gamification.progression import initialize_profile, process_activity

__all__ = [
    "calculate_base_xp",
    "calculate_level_from_xp",
    "get_character_tier",
    "xp_required_for_level",
    "is_suspicious",
    "update_streak",
    "check_quests",
    "get_active_quests",
    "initialize_profile",
    "process_activity",
]
