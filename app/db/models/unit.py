from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from app.db.base import Base
from app.core.timeutils import utcnow


class Unit(Base):
    __tablename__ = "units"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    code = Column(String, unique=True, nullable=False)
    course_id = Column(Integer, nullable=False, index=True)
    teacher_id = Column(Integer, nullable=True, index=True)


class UnitClassAssignment(Base):
    __tablename__ = "unit_class_assignments"
    __table_args__ = (
        UniqueConstraint("unit_id", "class_id", name="uq_unit_class_assignment"),
    )

    id = Column(Integer, primary_key=True, index=True)
    unit_id = Column(Integer, nullable=False, index=True)
    class_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow)
