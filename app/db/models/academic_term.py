from sqlalchemy import Column, Integer, String, Boolean, DateTime
from app.db.base import Base
from app.core.timeutils import utcnow


class AcademicTerm(Base):
    __tablename__ = "academic_terms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    week_count = Column(Integer, nullable=False)
    # at most one active term, enforced in app.crud.academic_term
    is_active = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)
