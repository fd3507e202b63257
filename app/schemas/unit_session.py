import datetime as dt
from pydantic import Field, StrictBool, model_validator
from typing import Optional

from app.schemas.base import CamelModel, TIME_PATTERN


class SessionCreate(CamelModel):
    date: dt.date
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    location: Optional[str] = None
    term_id: Optional[int] = None  # defaults to the active term
    week_number: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class UnitSessionCreate(SessionCreate):
    unit_id: int


class SessionOut(CamelModel):
    id: int
    schedule_id: Optional[int] = None
    unit_id: int
    date: dt.date
    start_time: str
    end_time: str
    location: Optional[str] = None
    week_number: int
    term_id: int
    is_active: bool
    is_cancelled: bool


class SessionWithRecordFlag(SessionOut):
    has_record_of_work: bool = False


class SessionStatusUpdate(CamelModel):
    is_active: StrictBool
    is_cancelled: Optional[StrictBool] = None


class CourseBrief(CamelModel):
    name: str
    code: str


class UnitBrief(CamelModel):
    id: int
    name: str
    code: str
    course: CourseBrief


class SessionWithUnit(SessionOut):
    unit: UnitBrief

