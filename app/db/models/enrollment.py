from sqlalchemy import Column, Integer, String, DateTime, Index, text
from app.db.base import Base
from app.core.timeutils import utcnow

ENROLLMENT_STATUSES = ("active", "completed", "dropped", "withdrawn")


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        # a student holds at most one active enrollment
        Index(
            "uq_enrollments_one_active_per_student",
            "student_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, nullable=False, index=True)
    class_id = Column(Integer, nullable=False, index=True)
    course_id = Column(Integer, nullable=False, index=True)
    term_id = Column(Integer, nullable=False)
    enrollment_date = Column(DateTime, default=utcnow)
    status = Column(String, default="active", nullable=False)
    final_grade = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
