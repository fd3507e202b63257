from sqlalchemy import Column, Integer, String, Boolean, DateTime
from app.db.base import Base
from app.core.timeutils import utcnow


class UnitSchedule(Base):
    """Weekly recurring slot of a unit."""
    __tablename__ = "unit_schedules"

    id = Column(Integer, primary_key=True, index=True)
    unit_id = Column(Integer, nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0-6, Sunday first
    start_time = Column(String, nullable=False)  # "HH:MM"
    end_time = Column(String, nullable=False)
    location = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    term_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow)
