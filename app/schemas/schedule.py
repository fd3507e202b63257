from datetime import datetime
from pydantic import Field, StrictBool, model_validator
from typing import Optional

from app.schemas.base import CamelModel, TIME_PATTERN

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class ScheduleCreate(CamelModel):
    unit_id: int
    day_of_week: int = Field(ge=0, le=6)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    location: Optional[str] = None
    is_active: bool = True
    term_id: Optional[int] = None  # defaults to the active term

    @model_validator(mode="after")
    def check_times(self):
        # zero-padded HH:MM compares correctly as text
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class ScheduleOut(CamelModel):
    id: int
    unit_id: int
    day_of_week: int
    start_time: str
    end_time: str
    location: Optional[str] = None
    is_active: bool
    term_id: int
    created_at: Optional[datetime] = None


class ScheduleWithDay(ScheduleOut):
    day_name: str
    type: str = "recurring"


class ScheduleDetail(ScheduleWithDay):
    unit_name: Optional[str] = None
    unit_code: Optional[str] = None
    term_name: Optional[str] = None


class StatusUpdate(CamelModel):
    is_active: StrictBool
