from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel


class DepartmentCreate(CamelModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    head_id: Optional[int] = None


class DepartmentUpdate(CamelModel):
    nullable_fields = frozenset({"head_id"})

    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    head_id: Optional[int] = None


class DepartmentOut(DepartmentCreate):
    id: int


class SectionCreate(CamelModel):
    name: str = Field(min_length=1)
    department_id: int


class SectionUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    department_id: Optional[int] = None


class SectionOut(SectionCreate):
    id: int


class LevelCreate(CamelModel):
    name: str = Field(min_length=1)


class LevelUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)


class LevelOut(LevelCreate):
    id: int


class CourseCreate(CamelModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    level_id: int
    department_id: int
    section_id: Optional[int] = None


class CourseUpdate(CamelModel):
    nullable_fields = frozenset({"section_id"})

    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    level_id: Optional[int] = None
    department_id: Optional[int] = None
    section_id: Optional[int] = None


class CourseOut(CourseCreate):
    id: int


class CourseWithLevel(CourseOut):
    level_name: str
