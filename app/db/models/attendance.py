# app/db/models/attendance.py
from sqlalchemy import Column, Integer, Boolean, DateTime, UniqueConstraint
from app.db.base import Base
from app.core.timeutils import utcnow


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        # one record per (session, student); mark_attendance upserts on this key
        UniqueConstraint("session_id", "student_id", name="uq_attendance_session_student"),
    )

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, nullable=False, index=True)
    student_id = Column(Integer, nullable=False, index=True)
    is_present = Column(Boolean, nullable=False, default=False)
    marked_by_self = Column(Boolean, nullable=False, default=False)
    marked_by_teacher = Column(Boolean, nullable=False, default=False)
    marked_at = Column(DateTime, nullable=False, default=utcnow)
    updated_by = Column(Integer, nullable=True)  # user who last edited it
    updated_at = Column(DateTime, nullable=True)
