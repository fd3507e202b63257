from sqlalchemy import Column, Integer, String, Text, DateTime
from app.db.base import Base
from app.core.timeutils import utcnow

CLASS_STATUSES = ("upcoming", "active", "completed", "cancelled")


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    code = Column(String, unique=True, nullable=False)
    course_id = Column(Integer, nullable=False, index=True)
    department_id = Column(Integer, nullable=False, index=True)
    section_id = Column(Integer, nullable=True)
    level_id = Column(Integer, nullable=False)
    term_id = Column(Integer, nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    # only "cancelled" is kept here; the other statuses are derived from the dates on read
    status = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
