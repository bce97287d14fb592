"""
In-Memory Profile Store

Reference implementation of the storage contract the progression service
relies on:

- get_profile(user_id) -> ProgressionSnapshot | None
- save_profile(user_id, snapshot)
- get_stats(user_id) -> UserStats | None
- save_stats(user_id, stats)
- delete_user(user_id)
- lock(user_id) -> asyncio.Lock serializing one user's read-modify-write

Records are copied on the way in and out so callers never share state
with the store.
"""

import asyncio
import logging
from typing import Dict, Optional

from endurance_rpg.models.game import ProgressionSnapshot
from endurance_rpg.models.stats import UserStats

logger = logging.getLogger(__name__)


class InMemoryProfileStore:
    """Process-local store for game profiles and activity stats"""

    def __init__(self):
        self._profiles: Dict[str, ProgressionSnapshot] = {}
        self._stats: Dict[str, UserStats] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        logger.debug("InMemoryProfileStore initialized (profiles are NOT persisted across restarts)")

    def lock(self, user_id: str) -> asyncio.Lock:
        """Per-user lock for read-modify-write sequences"""
        if user_id not in self._locks:
            self._locks[user_id] = asyncio.Lock()
        return self._locks[user_id]

    async def get_profile(self, user_id: str) -> Optional[ProgressionSnapshot]:
        """Get a user's game profile (None if the user has none yet)"""
        snapshot = self._profiles.get(user_id)
        return snapshot.model_copy(deep=True) if snapshot else None

    async def save_profile(self, user_id: str, snapshot: ProgressionSnapshot) -> None:
        """Save a user's game profile"""
        self._profiles[user_id] = snapshot.model_copy(deep=True)
        logger.debug(f"Saved game profile for user {user_id}")

    async def get_stats(self, user_id: str) -> Optional[UserStats]:
        """Get a user's activity totals"""
        stats = self._stats.get(user_id)
        return stats.model_copy() if stats else None

    async def save_stats(self, user_id: str, stats: UserStats) -> None:
        """Save a user's activity totals"""
        self._stats[user_id] = stats.model_copy()

    async def delete_user(self, user_id: str) -> None:
        """
        Remove everything stored for a user (account deletion)

        The user's lock is kept; lock(user_id) returns the same lock for
        the lifetime of the store.
        """
        self._profiles.pop(user_id, None)
        self._stats.pop(user_id, None)
        logger.info(f"Deleted game data for user {user_id}")
