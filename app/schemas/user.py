from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional

from app.schemas.base import CamelModel

Role = Literal["super_admin", "admin", "hod", "teacher", "student"]


class UserLogin(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str


def role_field_problems(role, department_id, admission_number, staff_id):
    """Which identifiers a role must carry. Returns the violations found."""
    problems = []
    if role == "student":
        if not department_id:
            problems.append("Department is required for students")
        if not admission_number:
            problems.append("Admission number is required for students")
        if staff_id:
            problems.append("Students cannot have a staff ID")
    elif role in ("teacher", "hod"):
        if not department_id:
            problems.append("Department is required for teachers")
        if not staff_id:
            problems.append("Staff ID is required for teachers")
        if admission_number:
            problems.append("Teachers cannot have an admission number")
    elif department_id is not None or admission_number or staff_id:
        problems.append("Admins cannot have a department, admission number or staff ID")
    return problems


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    role: Role
    department_id: Optional[int] = None
    admission_number: Optional[str] = None
    staff_id: Optional[str] = None

    @model_validator(mode="after")
    def check_role_fields(self):
        problems = role_field_problems(self.role, self.department_id, self.admission_number, self.staff_id)
        if problems:
            raise ValueError("; ".join(problems))
        return self


class UserUpdate(CamelModel):
    nullable_fields = frozenset({"department_id", "admission_number", "staff_id"})

    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    full_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    role: Optional[Role] = None
    department_id: Optional[int] = None
    admission_number: Optional[str] = None
    staff_id: Optional[str] = None


class UserOut(CamelModel):
    id: int
    username: str
    full_name: str
    email: str
    role: str
    department_id: Optional[int] = None
    admission_number: Optional[str] = None
    staff_id: Optional[str] = None
