"""Shared record types."""

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, field_validator


class CalendarEvent(BaseModel):
    """Descriptive event record handed to calendar integrations."""
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: date
    start_time: Optional[time] = None
    end_date: Optional[date] = None
    end_time: Optional[time] = None
    duration: Optional[int] = None  # minutes

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"duration must be >= 0 minutes, got {v}")
        return v
