from sqlalchemy import Column, Integer, String
from app.db.base import Base


class Level(Base):
    # global list ("Year 1".."Year 4"), not tied to a department
    __tablename__ = "levels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
