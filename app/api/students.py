# app/api/students.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, ensure_self_or_staff
from app.db.models.user import User
from app.crud import attendance as crud_attendance
from app.crud import unit_session as crud_session
from app.schemas.attendance import StudentAttendanceRecord
from app.schemas.unit_session import SessionWithUnit

router = APIRouter()


@router.get("/{student_id}/active-sessions", response_model=List[SessionWithUnit])
def student_active_sessions(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_staff(current_user, student_id)
    return crud_session.get_active_sessions_for_student(db, student_id)


@router.get("/{student_id}/attendance", response_model=List[StudentAttendanceRecord])
def student_attendance(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_staff(current_user, student_id)
    return crud_attendance.get_attendance_by_student(db, student_id)
