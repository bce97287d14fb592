"""
Daily Quest System

Each quest in the catalog is available on a fixed set of weekdays and asks
for a single activity that clears a distance and/or elevation threshold.
A quest pays its reward at most once per day.
"""

import logging
from datetime import date
from typing import Iterable, List

from endurance_rpg.config import DEFAULT_GAME_CONFIG, GameConfig
from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.game import QuestCheckResult, QuestDefinition
from endurance_rpg.utils.datetime_helpers import weekday_sunday_first

logger = logging.getLogger(__name__)


def get_active_quests(day: date, config: GameConfig = DEFAULT_GAME_CONFIG) -> List[QuestDefinition]:
    """Quests available on `day`, in catalog order"""
    weekday = weekday_sunday_first(day)
    return [quest for quest in config.quests if weekday in quest.active_weekdays]


def meets_requirement(activity: ActivityRecord, quest: QuestDefinition) -> bool:
    """True when the activity satisfies every threshold the quest sets"""
    requirement = quest.requirement
    if requirement.distance_meters is not None and activity.distance_meters < requirement.distance_meters:
        return False
    if requirement.elevation_meters is not None and activity.elevation_gain_meters < requirement.elevation_meters:
        return False
    return True


def check_quests(
    activity: ActivityRecord,
    activity_date: date,
    completed_today: Iterable[str],
    config: GameConfig = DEFAULT_GAME_CONFIG
) -> QuestCheckResult:
    """
    Find the quests an activity completes

    Args:
        activity: The activity being processed
        activity_date: Date used to pick the day's quest roster
        completed_today: Quest ids already rewarded today (skipped)
        config: Game configuration (quest catalog)

    Returns:
        QuestCheckResult with the bonus XP and newly completed quest ids
    """
    already_done = set(completed_today)
    result = QuestCheckResult()

    for quest in get_active_quests(activity_date, config):
        if quest.id in already_done:
            continue

        if meets_requirement(activity, quest):
            result.quest_bonus_xp += quest.reward_xp
            result.completed_quest_ids.append(quest.id)
            logger.info(f"Quest {quest.id} ({quest.name}) completed by activity {activity.id}: +{quest.reward_xp} XP")

    return result
