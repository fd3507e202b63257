import logging
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.timeutils import utcnow, week_start
from app.db.models.unit_session import UnitSession
from app.db.models.unit_schedule import UnitSchedule
from app.db.models.unit import Unit
from app.db.models.course import Course
from app.db.models.enrollment import Enrollment
from app.db.models.academic_term import AcademicTerm
from app.db.models.record_of_work import RecordOfWork
from app.crud.utils import add_row, as_dict, commit, save_changes
from app.crud.schedule import get_schedules_by_unit

logger = logging.getLogger(__name__)


def week_number_for(term: Optional[AcademicTerm], day: date) -> int:
    """1-based week of `day`, counting from the Sunday-week holding the term start."""
    if term is None:
        return 1
    first = week_start(term.start_date.date())
    return max(1, (week_start(day) - first).days // 7 + 1)


def get_unit_session(db: Session, session_id: int):
    return db.query(UnitSession).filter(UnitSession.id == session_id).first()


def create_unit_session(db: Session, unit_id: int, data: dict, term_id: int):
    """Insert a one-off session, outside any recurring schedule."""
    if data.get("week_number") is None:
        term = db.query(AcademicTerm).filter(AcademicTerm.id == term_id).first()
        data["week_number"] = week_number_for(term, data["date"])
    data.pop("term_id", None)
    session = add_row(db, UnitSession(unit_id=unit_id, term_id=term_id, **data))
    logger.info(f"Created session {session.id} for unit {unit_id} on {session.date}")
    return session


def get_sessions_by_unit(db: Session, unit_id: int):
    rows = (
        db.query(UnitSession, RecordOfWork.id)
        .outerjoin(RecordOfWork, RecordOfWork.session_id == UnitSession.id)
        .filter(UnitSession.unit_id == unit_id)
        .order_by(UnitSession.date, UnitSession.start_time)
        .all()
    )
    result = []
    for session, record_id in rows:
        data = as_dict(session)
        data["has_record_of_work"] = record_id is not None
        result.append(data)
    return result


def _open_sessions(db: Session):
    return (
        db.query(UnitSession)
        .join(Unit, Unit.id == UnitSession.unit_id)
        .filter(UnitSession.is_active.is_(True), UnitSession.is_cancelled.is_(False))
    )


def get_active_sessions_by_teacher(db: Session, teacher_id: int):
    return (
        _open_sessions(db)
        .filter(Unit.teacher_id == teacher_id)
        .order_by(UnitSession.date, UnitSession.start_time)
        .all()
    )


def get_active_sessions_for_student(db: Session, student_id: int):
    """Open sessions of units in the courses the student is actively enrolled in."""
    enrolled = select(Enrollment.course_id).where(
        Enrollment.student_id == student_id, Enrollment.status == "active"
    )
    rows = (
        db.query(UnitSession, Unit, Course)
        .join(Unit, Unit.id == UnitSession.unit_id)
        .join(Course, Course.id == Unit.course_id)
        .filter(
            UnitSession.is_active.is_(True),
            UnitSession.is_cancelled.is_(False),
            Unit.course_id.in_(enrolled),
        )
        .order_by(UnitSession.date, UnitSession.start_time)
        .all()
    )
    return [session_with_unit(s, u, c) for s, u, c in rows]


def session_with_unit(session: UnitSession, unit: Unit, course: Course) -> dict:
    data = as_dict(session)
    data["unit"] = {
        "id": unit.id,
        "name": unit.name,
        "code": unit.code,
        "course": {"name": course.name, "code": course.code},
    }
    return data


def update_unit_session_status(
    db: Session, session_id: int, is_active: bool, is_cancelled: Optional[bool] = None
):
    session = get_unit_session(db, session_id)
    if not session:
        return None
    updates = {"is_active": is_active}
    if is_cancelled is not None:
        updates["is_cancelled"] = is_cancelled
    return save_changes(db, session, updates)


def _dates_for(schedule: UnitSchedule, term: Optional[AcademicTerm], scope: str, today: date) -> List[date]:
    if scope == "week" or term is None:
        return [week_start(today) + timedelta(days=schedule.day_of_week)]
    first_day = term.start_date.date()
    last_day = term.end_date.date()
    day = week_start(first_day) + timedelta(days=schedule.day_of_week)
    dates = []
    while day <= last_day:
        if day >= first_day:
            dates.append(day)
        day += timedelta(days=7)
    return dates


def _queue_sessions(db: Session, schedule: UnitSchedule, scope: str, today: date) -> List[UnitSession]:
    term = db.query(AcademicTerm).filter(AcademicTerm.id == schedule.term_id).first()
    existing = {
        day for (day,) in
        db.query(UnitSession.date).filter(UnitSession.schedule_id == schedule.id).all()
    }
    created = []
    for day in _dates_for(schedule, term, scope, today):
        if day in existing:
            continue
        session = UnitSession(
            schedule_id=schedule.id,
            unit_id=schedule.unit_id,
            date=day,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            location=schedule.location,
            week_number=week_number_for(term, day),
            term_id=schedule.term_id,
            is_active=False,
            is_cancelled=False,
        )
        db.add(session)
        created.append(session)
    return created


def generate_sessions_for_schedule(
    db: Session, schedule: UnitSchedule, scope: str = "week", today: Optional[date] = None
) -> List[UnitSession]:
    """Materialize the schedule's occurrences; dates that already have a session are skipped."""
    created = _queue_sessions(db, schedule, scope, today or utcnow().date())
    commit(db, "Sessions for this schedule were generated concurrently")
    for session in created:
        db.refresh(session)
    return created


def generate_sessions_for_unit(
    db: Session, unit_id: int, scope: str = "week", today: Optional[date] = None
) -> List[UnitSession]:
    today = today or utcnow().date()
    created = []
    for schedule in get_schedules_by_unit(db, unit_id, active_only=True):
        created.extend(_queue_sessions(db, schedule, scope, today))
    commit(db, "Sessions for this unit were generated concurrently")
    for session in created:
        db.refresh(session)
    logger.info(f"Generated {len(created)} session(s) for unit {unit_id} ({scope})")
    return created
