from sqlalchemy import Column, Integer, String, Text, DateTime
from app.db.base import Base
from app.core.timeutils import utcnow


class RecordOfWork(Base):
    __tablename__ = "records_of_work"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, unique=True, nullable=False)
    topic = Column(String, nullable=False)
    subtopics = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    resources = Column(Text, nullable=True)
    assignment = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=True)
