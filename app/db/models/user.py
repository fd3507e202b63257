from sqlalchemy import Column, Integer, String
from app.db.base import Base

ROLES = ("super_admin", "admin", "hod", "teacher", "student")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # hashed
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    role = Column(String, nullable=False)
    department_id = Column(Integer, index=True, nullable=True)
    admission_number = Column(String, unique=True, nullable=True)  # students only
    staff_id = Column(String, unique=True, nullable=True)  # teachers and HODs only
