# Teacher-scoped listings: /api/teacher/{id}/... and /api/teachers/{id}/...
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, STAFF_ROLES
from app.db.models.user import User
from app.crud import unit as crud_unit
from app.crud import schedule as crud_schedule
from app.crud import unit_session as crud_session
from app.schemas.unit import UnitOut
from app.schemas.schedule import ScheduleWithDay
from app.schemas.unit_session import SessionOut

router = APIRouter()


def _check_teacher_scope(current_user: User, teacher_id: int):
    if current_user.role == "teacher" and current_user.id != teacher_id:
        raise HTTPException(status_code=403, detail="Teachers can only access their own data")


@router.get("/teacher/{teacher_id}/units", response_model=List[UnitOut])
def teacher_units(teacher_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_unit.get_units_by_teacher(db, teacher_id)


@router.get("/teacher/{teacher_id}/active-sessions", response_model=List[SessionOut])
def teacher_active_sessions(
    teacher_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    _check_teacher_scope(current_user, teacher_id)
    return crud_session.get_active_sessions_by_teacher(db, teacher_id)


@router.get("/teachers/{teacher_id}/schedules", response_model=List[ScheduleWithDay])
def teacher_schedules(teacher_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_schedule.get_schedules_by_teacher(db, teacher_id)
