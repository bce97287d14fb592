"""Configuration management"""
import json
import logging
import os
from pathlib import Path
from typing import Optional

import pydantic
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

from endurance_rpg.exceptions import ConfigurationError, wrap_external_exception
from endurance_rpg.models.game import QuestDefinition, QuestRequirement

load_dotenv()

logger = logging.getLogger(__name__)

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Optional JSON file with a full or partial game configuration
GAME_CONFIG_PATH: Optional[str] = os.getenv("GAME_CONFIG_PATH") or None

# Tuning overrides (unset means "use the built-in default")
ENV_OVERRIDES: dict[str, str] = {
    "daily_xp_cap": "DAILY_XP_CAP",
    "streak_threshold": "STREAK_THRESHOLD",
    "streak_bonus_multiplier": "STREAK_BONUS_MULTIPLIER",
    "max_running_speed_kmh": "MAX_RUNNING_SPEED_KMH",
}


class XPRates(BaseModel):
    """XP earned per unit, by activity class"""
    model_config = ConfigDict(frozen=True)

    running_km: float = 100  # Running: 1 km = 100 XP
    walking_km: float = 50  # Walk/Hike: 1 km = 50 XP
    cycling_km: float = 25  # Cycling: 1 km = 25 XP
    xc_ski_km: float = 50  # XC Ski: 1 km = 50 XP
    downhill_ski_km: float = 10  # Downhill Ski: 1 km = 10 XP
    swim_km: float = 500  # Swimming: 1 km = 500 XP
    workout_min: float = 10  # Workout/Strength: 1 min = 10 XP
    yoga_min: float = 5  # Yoga/Other: 1 min = 5 XP
    elevation_m: float = 2  # Elevation: 1 m = 2 XP


class ActivityTypeSets(BaseModel):
    """Strava activity types per class (case-sensitive)"""
    model_config = ConfigDict(frozen=True)

    running: frozenset[str] = frozenset({"Run", "VirtualRun", "TrailRun"})
    walking: frozenset[str] = frozenset({"Walk", "Hike"})
    cycling: frozenset[str] = frozenset({"Ride", "VirtualRide", "EBikeRide", "MountainBikeRide"})
    xc_ski: frozenset[str] = frozenset({"NordicSki", "BackcountrySki"})
    downhill_ski: frozenset[str] = frozenset({"AlpineSki", "Snowboard"})
    swimming: frozenset[str] = frozenset({"Swim"})
    workout: frozenset[str] = frozenset({"Workout", "WeightTraining", "Crossfit"})
    yoga: frozenset[str] = frozenset({"Yoga", "Elliptical", "StairStepper", "RockClimbing"})


DEFAULT_QUESTS: tuple[QuestDefinition, ...] = (
    QuestDefinition(
        id="DISTANCE_RUNNER",
        name="Distance Runner",
        description="Cover at least 5 km in a single activity",
        requirement=QuestRequirement(distance_meters=5000),
        reward_xp=150,
        active_weekdays=frozenset({1, 2, 3, 4, 5}),
    ),
    QuestDefinition(
        id="HILL_CLIMBER",
        name="Hill Climber",
        description="Climb at least 100 m in a single activity",
        requirement=QuestRequirement(elevation_meters=100),
        reward_xp=200,
        active_weekdays=frozenset({2, 4}),
    ),
    QuestDefinition(
        id="WEEKEND_WARRIOR",
        name="Weekend Warrior",
        description="Cover at least 10 km in a single weekend activity",
        requirement=QuestRequirement(distance_meters=10000),
        reward_xp=300,
        active_weekdays=frozenset({0, 6}),
    ),
)


class GameConfig(BaseModel):
    """
    Static game tuning, loaded once and passed into every engine function

    Leveling formula: XP_required = A × L^2 + B × L (L = level)
    """
    model_config = ConfigDict(frozen=True)

    # Leveling
    leveling_a: float = Field(default=100, gt=0)  # steepness coefficient
    leveling_b: float = Field(default=300, ge=0)  # linearity coefficient

    # Tier breakpoints (minimum level)
    apprentice_level: int = Field(default=10, ge=1)
    expert_level: int = Field(default=25, ge=1)
    master_level: int = Field(default=50, ge=1)

    rates: XPRates = Field(default_factory=XPRates)
    activity_types: ActivityTypeSets = Field(default_factory=ActivityTypeSets)

    # Streak system
    streak_threshold: int = Field(default=3, ge=1)  # days needed to activate streak
    streak_bonus_multiplier: float = Field(default=1.2, ge=1)  # +20% XP bonus

    # Anti-cheat
    max_running_speed_kmh: float = Field(default=25, gt=0)

    # Daily cap
    daily_xp_cap: int = Field(default=5000, gt=0)

    quests: tuple[QuestDefinition, ...] = DEFAULT_QUESTS

    @model_validator(mode="after")
    def check_tier_order(self) -> "GameConfig":
        if not self.apprentice_level < self.expert_level < self.master_level:
            raise ValueError("Tier breakpoints must increase: apprentice < expert < master")
        return self


DEFAULT_GAME_CONFIG = GameConfig()


def load_game_config(path: Optional[str] = None) -> GameConfig:
    """
    Build the game configuration

    Precedence (lowest to highest): built-in defaults, JSON file at `path`
    (or GAME_CONFIG_PATH), environment overrides.

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    path = path or GAME_CONFIG_PATH
    data: dict = {}

    if path:
        try:
            data = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise wrap_external_exception(e, operation="load_config_file", context={"path": path})
        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"Game configuration in {path} must be a JSON object",
                operation="load_config_file"
            )
        logger.info(f"Loaded game configuration from {path}")

    for field_name, env_var in ENV_OVERRIDES.items():
        raw = os.getenv(env_var)
        if raw:
            data[field_name] = raw
            logger.debug(f"Game config override {field_name}={raw} from {env_var}")

    try:
        return GameConfig.model_validate(data)
    except pydantic.ValidationError as e:
        raise wrap_external_exception(e, operation="load_config")


# Validation
def validate_config() -> None:
    """Validate process-level configuration"""
    if not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        raise ConfigurationError(f"Unknown LOG_LEVEL '{LOG_LEVEL}'", config_key="LOG_LEVEL")
    if GAME_CONFIG_PATH and not Path(GAME_CONFIG_PATH).is_file():
        raise ConfigurationError(
            f"GAME_CONFIG_PATH does not point to a file: {GAME_CONFIG_PATH}",
            config_key="GAME_CONFIG_PATH"
        )
