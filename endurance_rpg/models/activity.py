"""Activity models"""
from typing import Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
import pydantic

from endurance_rpg.exceptions import ValidationError, wrap_external_exception
from endurance_rpg.utils.datetime_helpers import parse_iso_timestamp, to_utc


class ActivityRecord(BaseModel):
    """A single logged activity, already fetched from the tracking service"""
    model_config = ConfigDict(frozen=True)

    id: str
    type: str  # Strava activity type, e.g. "Run", "Ride", "Swim"
    distance_meters: float = Field(default=0.0, ge=0)
    moving_time_seconds: float = Field(default=0.0, ge=0)
    elevation_gain_meters: float = Field(default=0.0, ge=0)
    start_timestamp: datetime

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """Strava ids are integers; store them as strings"""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("start_timestamp", mode="before")
    @classmethod
    def normalize_start(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_iso_timestamp(v)
        if isinstance(v, datetime):
            return to_utc(v)
        return v

    @classmethod
    def from_strava(cls, payload: dict[str, Any]) -> "ActivityRecord":
        """
        Build a record from a raw Strava activity payload

        Args:
            payload: Strava activity JSON (id, type, distance, moving_time,
                total_elevation_gain, start_date)

        Raises:
            ValidationError: If required fields are missing or invalid
        """
        if "start_date" not in payload:
            raise ValidationError(
                message="Activity is missing its start date",
                field="start_date",
                activity_id=payload.get("id"),
                operation="parse_strava_activity"
            )

        try:
            return cls(
                id=payload.get("id"),
                type=payload.get("type"),
                distance_meters=payload.get("distance") or 0.0,
                moving_time_seconds=payload.get("moving_time") or 0,
                elevation_gain_meters=payload.get("total_elevation_gain") or 0.0,
                start_timestamp=payload["start_date"],
            )
        except pydantic.ValidationError as e:
            raise wrap_external_exception(e, operation="parse_strava_activity", activity_id=payload.get("id"))
