"""Game progression models for gamification"""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CharacterTier(str, Enum):
    """Character rank derived from level"""
    NOVICE = "Novice"
    APPRENTICE = "Apprentice"
    EXPERT = "Expert"
    MASTER = "Master"


class QuestRequirement(BaseModel):
    """Thresholds an activity must meet; every present field must be satisfied"""
    model_config = ConfigDict(frozen=True)

    distance_meters: Optional[float] = Field(default=None, ge=0)
    elevation_meters: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_not_empty(self) -> "QuestRequirement":
        if self.distance_meters is None and self.elevation_meters is None:
            raise ValueError("Quest requirement needs a distance or an elevation threshold")
        return self


class QuestDefinition(BaseModel):
    """Daily quest definition (static catalog entry)"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    requirement: QuestRequirement
    reward_xp: int = Field(..., gt=0)
    active_weekdays: frozenset[int]  # 0=Sunday .. 6=Saturday

    @field_validator("active_weekdays")
    @classmethod
    def validate_weekdays(cls, v: frozenset[int]) -> frozenset[int]:
        invalid = sorted(day for day in v if not 0 <= day <= 6)
        if invalid:
            raise ValueError(f"Weekdays must be between 0 (Sunday) and 6 (Saturday), got {invalid}")
        return v


class LevelInfo(BaseModel):
    """Level resolved from a total XP amount"""
    level: int = Field(..., ge=1)
    current_level_xp: int = Field(..., ge=0)
    next_level_xp_required: int = Field(..., gt=0)


class StreakResult(BaseModel):
    """Streak state after an activity"""
    streak_count: int = Field(..., ge=0)
    streak_active: bool


class QuestCheckResult(BaseModel):
    """Quests completed by a single activity"""
    quest_bonus_xp: int = 0
    completed_quest_ids: list[str] = Field(default_factory=list)


class ProgressionSnapshot(BaseModel):
    """Persisted game profile, one per user"""
    total_xp: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    current_level_xp: int = Field(default=0, ge=0)
    next_level_xp_required: int = Field(..., gt=0)  # depends on the leveling curve, see initialize_profile
    streak_count: int = Field(default=0, ge=0)
    streak_active: bool = False
    last_activity_timestamp: Optional[datetime] = None
    daily_xp_earned: int = Field(default=0, ge=0)
    daily_xp_reset_timestamp: Optional[datetime] = None
    tier: CharacterTier = CharacterTier.NOVICE
    completed_quest_ids_today: set[str] = Field(default_factory=set)
    quest_reset_timestamp: Optional[datetime] = None

    @model_validator(mode="after")
    def check_level_progress(self) -> "ProgressionSnapshot":
        if self.current_level_xp >= self.next_level_xp_required:
            raise ValueError(
                f"current_level_xp ({self.current_level_xp}) must be below "
                f"next_level_xp_required ({self.next_level_xp_required})"
            )
        if self.current_level_xp > self.total_xp:
            raise ValueError("current_level_xp cannot exceed total_xp")
        return self


class XPAward(BaseModel):
    """XP breakdown for one processed activity (not persisted)"""
    base_xp: int = 0
    streak_bonus_xp: int = 0
    quest_bonus_xp: int = 0
    total_awarded_xp: int = 0
    completed_quest_ids: list[str] = Field(default_factory=list)
    was_capped: bool = False


class ProgressionOutcome(BaseModel):
    """Result of processing an activity against a profile"""
    award: XPAward
    snapshot: ProgressionSnapshot
    previous_level: int
    previous_tier: CharacterTier
    rejected: bool = False  # anti-cheat veto

    @property
    def leveled_up(self) -> bool:
        return self.snapshot.level > self.previous_level

    @property
    def tier_changed(self) -> bool:
        return self.snapshot.tier != self.previous_tier


class GameProfileResponse(BaseModel):
    """Game profile plus the quests available today"""
    status: str = "success"
    game: ProgressionSnapshot
    active_quests: list[QuestDefinition] = Field(default_factory=list)
