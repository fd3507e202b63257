from datetime import datetime
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import get_db
from app.core.security import create_access_token, get_password_hash
from app.db import Base, User, Department, Level, Course, AcademicTerm, SchoolClass, Unit
from app.crud import school_class as crud_class

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

PASSWORD = "secret123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def add(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def make_user(db, username, role, **extra):
    return add(db, User(
        username=username,
        password=get_password_hash(PASSWORD),
        full_name=extra.pop("full_name", username.replace("_", " ").title()),
        email=f"{username}@college.test",
        role=role,
        **extra,
    ))


def auth_headers(user):
    token = create_access_token({"sub": user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def department(db):
    return add(db, Department(name="Computing", code="COMP"))


@pytest.fixture
def other_department(db):
    return add(db, Department(name="Business", code="BUS"))


@pytest.fixture
def admin(db):
    return make_user(db, "admin", "admin")


@pytest.fixture
def hod(db, department):
    return make_user(db, "hod_comp", "hod", department_id=department.id, staff_id="H001")


@pytest.fixture
def teacher(db, department):
    return make_user(db, "teacher_one", "teacher", department_id=department.id, staff_id="T001")


@pytest.fixture
def other_teacher(db, department):
    return make_user(db, "teacher_two", "teacher", department_id=department.id, staff_id="T002")


@pytest.fixture
def student(db, department):
    return make_user(db, "student_one", "student", department_id=department.id, admission_number="S001")


@pytest.fixture
def other_student(db, department):
    return make_user(db, "student_two", "student", department_id=department.id, admission_number="S002")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def hod_headers(hod):
    return auth_headers(hod)


@pytest.fixture
def teacher_headers(teacher):
    return auth_headers(teacher)


@pytest.fixture
def student_headers(student):
    return auth_headers(student)


@pytest.fixture
def school(db, department, teacher):
    """An active term, a level, a course, a class and a unit taught in that class."""
    level = add(db, Level(name="Year 1"))
    course = add(db, Course(
        name="Software Engineering", code="SE101", level_id=level.id, department_id=department.id,
    ))
    term = add(db, AcademicTerm(
        name="Term 1 2026",
        start_date=datetime(2026, 9, 1),
        end_date=datetime(2026, 12, 15),
        week_count=15,
        is_active=True,
    ))
    school_class = add(db, SchoolClass(
        name="SE Year 1 A",
        code="SE1A",
        course_id=course.id,
        department_id=department.id,
        level_id=level.id,
        term_id=term.id,
        start_date=datetime(2026, 9, 1),
        end_date=datetime(2026, 12, 15),
    ))
    unit = add(db, Unit(name="Programming I", code="PRG1", course_id=course.id, teacher_id=teacher.id))
    crud_class.assign_units_to_class(db, school_class.id, [unit.id])
    return SimpleNamespace(level=level, course=course, term=term, school_class=school_class, unit=unit)


def find_key(payload, key):
    """True when `key` appears anywhere in a decoded JSON payload."""
    if isinstance(payload, dict):
        return key in payload or any(find_key(v, key) for v in payload.values())
    if isinstance(payload, list):
        return any(find_key(item, key) for item in payload)
    return False
