"""Unit tests for Pydantic models"""
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError as PydanticValidationError

from endurance_rpg.exceptions import ValidationError
from endurance_rpg.models.activity import ActivityRecord
from endurance_rpg.models.game import (
    CharacterTier,
    ProgressionOutcome,
    ProgressionSnapshot,
    QuestDefinition,
    QuestRequirement,
    XPAward,
)


@pytest.fixture
def strava_payload():
    """Trimmed Strava activity payload"""
    return {
        "id": 11872648412,
        "name": "Morning Run",
        "distance": 10012.4,
        "moving_time": 3125,
        "elapsed_time": 3300,
        "total_elevation_gain": 84.0,
        "type": "Run",
        "sport_type": "TrailRun",
        "start_date": "2024-06-15T06:12:45Z",
        "start_date_local": "2024-06-15T08:12:45Z",
        "timezone": "(GMT+01:00) Europe/Paris",
    }


# ============================================================================
# ActivityRecord Tests
# ============================================================================

def test_activity_from_strava(strava_payload):
    activity = ActivityRecord.from_strava(strava_payload)

    assert activity.id == "11872648412"
    assert activity.type == "Run"
    assert activity.distance_meters == 10012.4
    assert activity.moving_time_seconds == 3125
    assert activity.elevation_gain_meters == 84.0
    assert activity.start_timestamp == datetime(2024, 6, 15, 6, 12, 45, tzinfo=timezone.utc)


def test_activity_from_strava_missing_optional_numbers(strava_payload):
    del strava_payload["total_elevation_gain"]
    strava_payload["distance"] = None

    activity = ActivityRecord.from_strava(strava_payload)

    assert activity.distance_meters == 0
    assert activity.elevation_gain_meters == 0


def test_activity_from_strava_missing_start_date(strava_payload):
    del strava_payload["start_date"]

    with pytest.raises(ValidationError) as exc_info:
        ActivityRecord.from_strava(strava_payload)

    assert exc_info.value.field == "start_date"
    assert exc_info.value.activity_id == "11872648412"


def test_activity_from_strava_negative_distance(strava_payload):
    strava_payload["distance"] = -50

    with pytest.raises(ValidationError) as exc_info:
        ActivityRecord.from_strava(strava_payload)

    assert exc_info.value.field == "distance_meters"


def test_activity_from_strava_bad_date(strava_payload):
    strava_payload["start_date"] = "yesterday"

    with pytest.raises(ValidationError) as exc_info:
        ActivityRecord.from_strava(strava_payload)

    assert exc_info.value.field == "start_timestamp"


def test_activity_naive_start_is_utc():
    activity = ActivityRecord(id="1", type="Walk", start_timestamp=datetime(2024, 6, 15, 9, 0))

    assert activity.start_timestamp.tzinfo is not None
    assert activity.start_timestamp.utcoffset().total_seconds() == 0


def test_activity_is_immutable():
    activity = ActivityRecord(id="1", type="Walk", start_timestamp=datetime(2024, 6, 15, tzinfo=timezone.utc))

    with pytest.raises(PydanticValidationError):
        activity.distance_meters = 100


# ============================================================================
# ProgressionSnapshot Tests
# ============================================================================

def test_snapshot_rejects_progress_beyond_level():
    with pytest.raises(PydanticValidationError):
        ProgressionSnapshot(total_xp=1500, level=1, current_level_xp=1500, next_level_xp_required=1000)


def test_snapshot_rejects_negative_xp():
    with pytest.raises(PydanticValidationError):
        ProgressionSnapshot(total_xp=-1, next_level_xp_required=1000)


def test_snapshot_requires_next_level_threshold():
    """Fresh profiles come from initialize_profile, never from bare defaults"""
    with pytest.raises(PydanticValidationError):
        ProgressionSnapshot()


def test_snapshot_json_round_trip_keeps_quest_set():
    snapshot = ProgressionSnapshot(
        total_xp=1300,
        level=2,
        current_level_xp=300,
        next_level_xp_required=800,
        tier=CharacterTier.NOVICE,
        completed_quest_ids_today={"WEEKEND_WARRIOR"},
    )

    restored = ProgressionSnapshot.model_validate_json(snapshot.model_dump_json())

    assert restored == snapshot
    assert restored.completed_quest_ids_today == {"WEEKEND_WARRIOR"}


# ============================================================================
# Quest Model Tests
# ============================================================================

def test_quest_rejects_bad_weekday():
    with pytest.raises(PydanticValidationError):
        QuestDefinition(
            id="BAD",
            name="Bad",
            requirement=QuestRequirement(distance_meters=1000),
            reward_xp=10,
            active_weekdays=frozenset({7}),
        )


def test_quest_requires_positive_reward():
    with pytest.raises(PydanticValidationError):
        QuestDefinition(
            id="FREE",
            name="Free",
            requirement=QuestRequirement(distance_meters=1000),
            reward_xp=0,
            active_weekdays=frozenset({1}),
        )


def test_quest_requirement_needs_a_threshold():
    with pytest.raises(PydanticValidationError):
        QuestRequirement()


# ============================================================================
# ProgressionOutcome Tests
# ============================================================================

def test_outcome_flags():
    snapshot = ProgressionSnapshot(
        total_xp=13100, level=10, current_level_xp=100,
        next_level_xp_required=2400, tier=CharacterTier.APPRENTICE,
    )
    outcome = ProgressionOutcome(
        award=XPAward(base_xp=500, total_awarded_xp=500),
        snapshot=snapshot,
        previous_level=9,
        previous_tier=CharacterTier.NOVICE,
    )

    assert outcome.leveled_up is True
    assert outcome.tier_changed is True
