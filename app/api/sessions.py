# app/api/sessions.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, STAFF_ROLES
from app.crud import unit_session as crud_session
from app.crud import unit as crud_unit
from app.crud import academic_term as crud_term
from app.crud import attendance as crud_attendance
from app.crud import record_of_work as crud_record
from app.schemas.unit_session import UnitSessionCreate, SessionOut, SessionStatusUpdate
from app.schemas.attendance import AttendanceOut, SessionStudent
from app.schemas.record_of_work import RecordOfWorkOut

router = APIRouter()


def _session_or_404(db: Session, session_id: int):
    session = crud_session.get_unit_session(db, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/unit-sessions", response_model=SessionOut, status_code=status.HTTP_201_CREATED)
def create_session(
    session_in: UnitSessionCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    if not crud_unit.get_unit(db, session_in.unit_id):
        raise HTTPException(status_code=404, detail="Unit not found")
    term_id = crud_term.resolve_term_id(db, session_in.term_id)
    data = session_in.model_dump(exclude={"unit_id"})
    return crud_session.create_unit_session(db, session_in.unit_id, data, term_id)


def _update_status(db: Session, session_id: int, status_in: SessionStatusUpdate):
    session = crud_session.update_unit_session_status(
        db, session_id, status_in.is_active, status_in.is_cancelled
    )
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.patch("/sessions/{session_id}/status", response_model=SessionOut)
def update_session_status(
    session_id: int,
    status_in: SessionStatusUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    return _update_status(db, session_id, status_in)


@router.patch("/unit-sessions/{session_id}/status", response_model=SessionOut)
def update_unit_session_status(
    session_id: int,
    status_in: SessionStatusUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    return _update_status(db, session_id, status_in)


@router.get("/sessions/{session_id}/attendance", response_model=List[AttendanceOut])
def session_attendance(session_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    _session_or_404(db, session_id)
    return crud_attendance.get_attendance_by_session(db, session_id)


@router.get("/sessions/{session_id}/students", response_model=List[SessionStudent])
def session_students(session_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    _session_or_404(db, session_id)
    return crud_attendance.get_students_by_session(db, session_id)


@router.get("/sessions/{session_id}/record", response_model=RecordOfWorkOut)
def session_record(session_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    _session_or_404(db, session_id)
    record = crud_record.get_record_of_work_by_session(db, session_id)
    if not record:
        raise HTTPException(status_code=404, detail="No record of work for this session")
    return record
