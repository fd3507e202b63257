from sqlalchemy import Column, Integer, String, Boolean, Date, UniqueConstraint
from app.db.base import Base


class UnitSession(Base):
    """A concrete calendar occurrence of a unit.

    Rows come either from materializing a UnitSchedule (schedule_id set) or
    from a one-off insert (schedule_id is NULL).
    """
    __tablename__ = "unit_sessions"
    __table_args__ = (
        UniqueConstraint("schedule_id", "date", name="uq_unit_session_schedule_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(Integer, nullable=True, index=True)
    unit_id = Column(Integer, nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(String, nullable=False)  # "HH:MM"
    end_time = Column(String, nullable=False)
    location = Column(String, nullable=True)
    week_number = Column(Integer, nullable=False, default=1)
    term_id = Column(Integer, nullable=False, index=True)
    is_active = Column(Boolean, default=False, nullable=False)
    is_cancelled = Column(Boolean, default=False, nullable=False)
