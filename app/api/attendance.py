# app/api/attendance.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ensure_self_or_staff, STAFF_ROLES
from app.db.models.user import User
from app.crud import attendance as crud_attendance
from app.crud import unit_session as crud_session
from app.schemas.attendance import (
    AttendanceCreate,
    AttendanceUpdate,
    AttendanceOut,
    BulkAttendanceEntry,
    BulkAttendanceIn,
    BulkAttendanceResult,
    StudentAttendanceRecord,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def mark_attendance(
    record: AttendanceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if current_user.role == "student":
        if record.student_id != current_user.id:
            raise HTTPException(status_code=403, detail="Students can only mark their own attendance")
        marked_by_self, marked_by_teacher = True, False
    elif current_user.role in STAFF_ROLES:
        marked_by_self, marked_by_teacher = record.marked_by_self, True
    else:
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    session = crud_session.get_unit_session(db, record.session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    if marked_by_self and (not session.is_active or session.is_cancelled):
        raise HTTPException(status_code=400, detail="Session is not open for attendance")

    return crud_attendance.mark_attendance(
        db,
        session_id=record.session_id,
        student_id=record.student_id,
        is_present=record.is_present,
        marked_by_self=marked_by_self,
        marked_by_teacher=marked_by_teacher,
    )


@router.post("/bulk", response_model=BulkAttendanceResult, status_code=status.HTTP_201_CREATED)
def mark_bulk_attendance(
    batch: BulkAttendanceIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    if not crud_session.get_unit_session(db, batch.session_id):
        raise HTTPException(status_code=404, detail="Session not found")

    records, errors = [], []
    for index, raw in enumerate(batch.attendance):
        try:
            entry = BulkAttendanceEntry.model_validate(raw)
        except ValidationError as exc:
            logger.warning(f"Skipping attendance entry #{index} for session {batch.session_id}: {raw!r}")
            errors.append({
                "index": index,
                "entry": raw,
                "error": "; ".join(err["msg"] for err in exc.errors()),
            })
            continue
        try:
            records.append(crud_attendance.mark_attendance(
                db,
                session_id=batch.session_id,
                student_id=entry.student_id,
                is_present=entry.is_present,
                marked_by_teacher=True,
            ))
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to save attendance entry #{index} for session {batch.session_id}")
            errors.append({"index": index, "entry": raw, "error": "Failed to save attendance"})

    logger.info(
        f"Bulk attendance for session {batch.session_id}: "
        f"{len(records)} saved, {len(errors)} skipped"
    )
    return {
        "message": f"Attendance saved for {len(records)} student(s)",
        "records": records,
        "errors": errors,
    }


@router.patch("/{attendance_id}", response_model=AttendanceOut)
def update_attendance(
    attendance_id: int,
    attendance_in: AttendanceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    attendance = crud_attendance.update_attendance(
        db, attendance_id, attendance_in.is_present, updated_by=current_user.id
    )
    if not attendance:
        raise HTTPException(status_code=404, detail="Attendance record not found")
    return attendance


@router.get("/student/{student_id}", response_model=List[StudentAttendanceRecord])
def student_attendance(
    student_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ensure_self_or_staff(current_user, student_id)
    return crud_attendance.get_attendance_by_student(db, student_id)
