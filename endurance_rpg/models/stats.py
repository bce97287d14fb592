"""Lifetime activity totals per user"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class UserStats(BaseModel):
    """Aggregated totals across every stored activity"""
    total_distance_meters: float = Field(default=0.0, ge=0)
    total_moving_time_seconds: float = Field(default=0.0, ge=0)
    total_elevation_gain_meters: float = Field(default=0.0, ge=0)
    activities_count: int = Field(default=0, ge=0)
    last_activity_timestamp: Optional[datetime] = None
