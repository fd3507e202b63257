from sqlalchemy import Column, Integer, String
from app.db.base import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    code = Column(String, unique=True, nullable=False)
    head_id = Column(Integer, nullable=True)  # user with role hod
