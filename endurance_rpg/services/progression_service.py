"""
ProgressionService - Game Progression Business Logic

Wraps the pure gamification engine with storage: loads the stored profile,
runs the engine, persists the result and keeps lifetime activity stats.
"""

import logging
from datetime import datetime
from typing import Optional

from endurance_rpg.config import DEFAULT_GAME_CONFIG, GameConfig
from endurance_rpg.exceptions import EnduranceRPGError, RecordNotFoundError, wrap_external_exception
from endurance_rpg.gamification.activity_stats import apply_activity_to_stats
from endurance_rpg.gamification.progression import initialize_profile, process_activity
from endurance_rpg.gamification.quests import get_active_quests
from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.game import GameProfileResponse, ProgressionOutcome, ProgressionSnapshot
from endurance_rpg.models.stats import UserStats
from endurance_rpg.utils.datetime_helpers import now_utc, utc_date

logger = logging.getLogger(__name__)


class ProgressionService:
    """
    Service for game progression.

    Responsibilities:
    - Scoring activities and persisting the updated game profile
    - Lazily creating profiles for new users
    - Serving the profile together with today's quests
    - Maintaining lifetime activity stats
    """

    def __init__(self, store, config: GameConfig = DEFAULT_GAME_CONFIG):
        """
        Initialize ProgressionService.

        Args:
            store: Profile store (see InMemoryProfileStore for the contract)
            config: Game configuration
        """
        self.store = store
        self.config = config
        logger.debug("ProgressionService initialized")

    async def process_activity(
        self,
        user_id: str,
        activity: ActivityRecord,
        now: Optional[datetime] = None
    ) -> ProgressionOutcome:
        """
        Score an activity and persist the user's new game profile.

        Stats are updated for every activity, including ones vetoed by
        anti-cheat. A vetoed activity leaves the stored profile untouched.

        Args:
            user_id: User ID
            activity: Activity to score
            now: Processing time (defaults to the current UTC time)

        Returns:
            ProgressionOutcome with the XP award and the saved snapshot
        """
        now = now or now_utc()

        async with self.store.lock(user_id):
            try:
                snapshot = await self.store.get_profile(user_id)
                outcome = process_activity(snapshot, activity, now, self.config)

                if snapshot is None or not outcome.rejected:
                    await self.store.save_profile(user_id, outcome.snapshot)

                stats = await self.store.get_stats(user_id)
                await self.store.save_stats(user_id, apply_activity_to_stats(stats, activity, increment=True))
            except EnduranceRPGError:
                raise
            except Exception as e:
                raise wrap_external_exception(
                    e,
                    operation="process_activity",
                    user_id=user_id,
                    activity_id=activity.id
                )

        award = outcome.award
        logger.info(
            f"Game profile updated for user {user_id}: "
            f"+{award.total_awarded_xp} XP (Total: {outcome.snapshot.total_xp}), "
            f"Level {outcome.snapshot.level}, Streak: {outcome.snapshot.streak_count} days"
        )

        if outcome.leveled_up:
            logger.info(f"User {user_id} leveled up from {outcome.previous_level} to {outcome.snapshot.level}!")

        return outcome

    async def initialize_profile(self, user_id: str) -> ProgressionSnapshot:
        """Create and store a fresh game profile"""
        snapshot = initialize_profile(self.config)
        await self.store.save_profile(user_id, snapshot)
        logger.info(f"Initialized game profile for user {user_id}")
        return snapshot

    async def get_game_profile(self, user_id: str, now: Optional[datetime] = None) -> GameProfileResponse:
        """
        Get the user's game profile with the quests active today.

        Creates the profile first if the user has none.
        """
        now = now or now_utc()

        async with self.store.lock(user_id):
            snapshot = await self.store.get_profile(user_id)
            if snapshot is None:
                snapshot = await self.initialize_profile(user_id)

        return GameProfileResponse(
            game=snapshot,
            active_quests=get_active_quests(utc_date(now), self.config),
        )

    async def get_stats(self, user_id: str) -> UserStats:
        """Get lifetime stats (all zero for users without activities)"""
        stats = await self.store.get_stats(user_id)
        return stats or UserStats()

    async def remove_activity_stats(self, user_id: str, activity: ActivityRecord) -> UserStats:
        """
        Remove a deleted activity from the user's stats.

        XP already awarded for it is kept.

        Raises:
            RecordNotFoundError: If the user has no stats
        """
        async with self.store.lock(user_id):
            stats = await self.store.get_stats(user_id)
            if stats is None:
                raise RecordNotFoundError(
                    message=f"No activity stats stored for user {user_id}",
                    record_type="UserStats",
                    record_id=user_id,
                    user_id=user_id,
                    operation="remove_activity_stats"
                )

            updated = apply_activity_to_stats(stats, activity, increment=False)
            await self.store.save_stats(user_id, updated)

        logger.info(f"Updated stats for user {user_id}: removed activity {activity.id}")
        return updated

    async def replace_activity_stats(
        self,
        user_id: str,
        old_activity: ActivityRecord,
        new_activity: ActivityRecord
    ) -> UserStats:
        """Swap an edited activity's old values for its new ones in the stats"""
        async with self.store.lock(user_id):
            stats = await self.store.get_stats(user_id)
            stats = apply_activity_to_stats(stats, old_activity, increment=False)
            stats = apply_activity_to_stats(stats, new_activity, increment=True)
            await self.store.save_stats(user_id, stats)

        logger.info(f"Updated stats for user {user_id}: replaced activity {old_activity.id}")
        return stats
