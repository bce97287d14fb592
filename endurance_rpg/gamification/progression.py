"""
Progression Orchestrator

Combines anti-cheat, base XP, streak bonus, daily quests and the daily cap
into one XP award, and derives the profile snapshot to persist.

Pipeline:
  activity → anti-cheat veto → base XP → streak bonus (stored streak state)
  → quests → daily cap → level/tier → streak update → new snapshot

Everything here is pure: the caller supplies the stored snapshot and the
processing clock, and persists the returned snapshot.
"""

import logging
from datetime import datetime
from typing import Optional

from endurance_rpg.config import DEFAULT_GAME_CONFIG, GameConfig
from endurance_rpg.gamification.anti_cheat import is_suspicious
from endurance_rpg.gamification.quests import check_quests
from endurance_rpg.gamification.streak_system import update_streak
from endurance_rpg.gamification.xp_system import (
    calculate_base_xp,
    calculate_level_from_xp,
    calculate_streak_bonus,
    get_character_tier,
    xp_required_for_level,
)
from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.game import CharacterTier, ProgressionOutcome, ProgressionSnapshot, XPAward
from endurance_rpg.utils.datetime_helpers import is_same_day, to_utc, utc_date

logger = logging.getLogger(__name__)


def initialize_profile(config: GameConfig = DEFAULT_GAME_CONFIG) -> ProgressionSnapshot:
    """Fresh game profile for a new user"""
    return ProgressionSnapshot(
        total_xp=0,
        level=1,
        current_level_xp=0,
        next_level_xp_required=xp_required_for_level(2, config),
        streak_count=0,
        streak_active=False,
        daily_xp_earned=0,
        tier=CharacterTier.NOVICE,
        completed_quest_ids_today=set(),
    )


def apply_daily_cap(total_xp: int, daily_xp_earned: int, daily_cap: int) -> tuple[int, bool]:
    """
    Clamp an award so the day's total stays within the cap

    Returns:
        (awarded XP, whether the cap was applied)
    """
    if daily_xp_earned + total_xp > daily_cap:
        return max(0, daily_cap - daily_xp_earned), True
    return total_xp, False


def process_activity(
    snapshot: Optional[ProgressionSnapshot],
    activity: ActivityRecord,
    now: datetime,
    config: GameConfig = DEFAULT_GAME_CONFIG
) -> ProgressionOutcome:
    """
    Award XP for an activity and compute the updated profile

    Args:
        snapshot: Stored profile, or None for a user without one yet
        activity: The activity to score
        now: Processing time; decides what "today" means for the daily cap
            and the quest roster reset
        config: Game configuration

    Returns:
        ProgressionOutcome with the award and the snapshot to persist.
        A vetoed activity returns a zero award and the snapshot unchanged.
    """
    if snapshot is None:
        snapshot = initialize_profile(config)

    now = to_utc(now)
    previous_level = snapshot.level
    previous_tier = snapshot.tier

    # Anti-cheat veto
    if is_suspicious(activity, config):
        logger.warning(f"Suspicious speed detected for activity {activity.id}, awarding 0 XP")
        return ProgressionOutcome(
            award=XPAward(),
            snapshot=snapshot.model_copy(deep=True),
            previous_level=previous_level,
            previous_tier=previous_tier,
            rejected=True,
        )

    base_xp = calculate_base_xp(activity, config)

    # Bonus uses the streak state from before this activity
    streak_bonus_xp = calculate_streak_bonus(base_xp, snapshot.streak_active, config)
    if streak_bonus_xp:
        logger.info(f"Streak bonus applied: +{streak_bonus_xp} XP")

    is_today = is_same_day(activity.start_timestamp, now)

    daily_xp_earned = snapshot.daily_xp_earned
    if not is_same_day(snapshot.daily_xp_reset_timestamp, now):
        daily_xp_earned = 0

    completed_today = set(snapshot.completed_quest_ids_today)
    if not is_same_day(snapshot.quest_reset_timestamp, now):
        completed_today = set()

    quest_result = check_quests(activity, utc_date(activity.start_timestamp), completed_today, config)

    total_xp = base_xp + streak_bonus_xp + quest_result.quest_bonus_xp
    was_capped = False
    if is_today:
        total_xp, was_capped = apply_daily_cap(total_xp, daily_xp_earned, config.daily_xp_cap)
        if was_capped:
            logger.info(
                f"Daily XP cap reached for activity {activity.id}: "
                f"awarding {total_xp} XP ({daily_xp_earned}/{config.daily_xp_cap} already earned today)"
            )

    new_total_xp = snapshot.total_xp + total_xp
    level_info = calculate_level_from_xp(new_total_xp, config)

    streak = update_streak(
        snapshot.last_activity_timestamp,
        snapshot.streak_count,
        activity.start_timestamp,
        config,
    )

    new_snapshot = ProgressionSnapshot(
        total_xp=new_total_xp,
        level=level_info.level,
        current_level_xp=level_info.current_level_xp,
        next_level_xp_required=level_info.next_level_xp_required,
        streak_count=streak.streak_count,
        streak_active=streak.streak_active,
        last_activity_timestamp=activity.start_timestamp,
        daily_xp_earned=daily_xp_earned + (total_xp if is_today else 0),
        daily_xp_reset_timestamp=now,
        tier=get_character_tier(level_info.level, config),
        completed_quest_ids_today=completed_today | set(quest_result.completed_quest_ids),
        quest_reset_timestamp=now,
    )

    award = XPAward(
        base_xp=base_xp,
        streak_bonus_xp=streak_bonus_xp,
        quest_bonus_xp=quest_result.quest_bonus_xp,
        total_awarded_xp=total_xp,
        completed_quest_ids=quest_result.completed_quest_ids,
        was_capped=was_capped,
    )

    return ProgressionOutcome(
        award=award,
        snapshot=new_snapshot,
        previous_level=previous_level,
        previous_tier=previous_tier,
    )
