import math
from datetime import datetime
from pydantic import Field, field_validator, model_validator
from typing import Optional

from app.schemas.base import CamelModel, naive_utc


class AcademicTermCreate(CamelModel):
    name: str = Field(min_length=1)
    start_date: datetime
    end_date: datetime
    week_count: Optional[int] = Field(default=None, ge=1)
    is_active: bool = False

    normalize_dates = field_validator("start_date", "end_date")(naive_utc)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        if self.week_count is None:
            self.week_count = max(1, math.ceil((self.end_date - self.start_date).days / 7))
        return self


class AcademicTermUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    week_count: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None

    normalize_dates = field_validator("start_date", "end_date")(naive_utc)


class AcademicTermOut(CamelModel):
    id: int
    name: str
    start_date: datetime
    end_date: datetime
    week_count: int
    is_active: bool
    created_at: Optional[datetime] = None
