"""Global test fixtures and utilities for endurance-rpg tests"""
import pytest
from datetime import datetime, timedelta, timezone

from endurance_rpg.config import GameConfig
from endurance_rpg.gamification.profile_store import InMemoryProfileStore
from endurance_rpg.gamification.xp_system import calculate_level_from_xp, get_character_tier
from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.game import ProgressionSnapshot


# ============================================================================
# Dates
# ============================================================================
# 2024-06-15 is a Saturday, 2024-06-17 a Monday, 2024-06-18 a Tuesday

SATURDAY = datetime(2024, 6, 15, 8, 0, tzinfo=timezone.utc)
SUNDAY = SATURDAY + timedelta(days=1)
MONDAY = SATURDAY + timedelta(days=2)
TUESDAY = SATURDAY + timedelta(days=3)


@pytest.fixture
def saturday():
    return SATURDAY


@pytest.fixture
def monday():
    return MONDAY


# ============================================================================
# Config & Storage
# ============================================================================

@pytest.fixture(autouse=True)
def clean_game_env(monkeypatch):
    """Keep developer env overrides out of the tests"""
    for var in ("DAILY_XP_CAP", "STREAK_THRESHOLD", "STREAK_BONUS_MULTIPLIER", "MAX_RUNNING_SPEED_KMH"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def game_config():
    """Default game configuration"""
    return GameConfig()


@pytest.fixture
def profile_store():
    """Empty in-memory profile store"""
    return InMemoryProfileStore()


# ============================================================================
# Factories
# ============================================================================

@pytest.fixture
def activity_factory():
    """Build activities with sensible defaults (a 5 km Saturday run)"""
    counter = {"next_id": 1000}

    def _create(**overrides):
        counter["next_id"] += 1
        data = {
            "id": str(counter["next_id"]),
            "type": "Run",
            "distance_meters": 5000.0,
            "moving_time_seconds": 1500.0,
            "elevation_gain_meters": 0.0,
            "start_timestamp": SATURDAY,
        }
        data.update(overrides)
        return ActivityRecord(**data)

    return _create


@pytest.fixture
def snapshot_factory():
    """Build snapshots whose level fields are consistent with total_xp"""

    def _create(total_xp=0, **overrides):
        level_info = calculate_level_from_xp(total_xp)
        data = {
            "total_xp": total_xp,
            "level": level_info.level,
            "current_level_xp": level_info.current_level_xp,
            "next_level_xp_required": level_info.next_level_xp_required,
            "tier": get_character_tier(level_info.level),
        }
        data.update(overrides)
        return ProgressionSnapshot(**data)

    return _create
