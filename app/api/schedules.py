from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES, STAFF_ROLES
from app.crud import schedule as crud_schedule
from app.crud import unit as crud_unit
from app.crud import academic_term as crud_term
from app.crud import unit_session as crud_session
from app.schemas.schedule import ScheduleCreate, ScheduleOut, ScheduleDetail, StatusUpdate
from app.schemas.unit_session import SessionOut

router = APIRouter()


@router.get("", response_model=List[ScheduleDetail])
def list_schedules(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_schedule.get_all_unit_schedules(db)


@router.post("", response_model=ScheduleOut, status_code=status.HTTP_201_CREATED)
def create_schedule(
    schedule_in: ScheduleCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    if not crud_unit.get_unit(db, schedule_in.unit_id):
        raise HTTPException(status_code=400, detail="Unit not found")
    data = schedule_in.model_dump()
    data["term_id"] = crud_term.resolve_term_id(db, schedule_in.term_id)
    return crud_schedule.create_unit_schedule(db, data)


@router.patch("/{schedule_id}/status", response_model=ScheduleOut)
def update_schedule_status(
    schedule_id: int,
    status_in: StatusUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    schedule = crud_schedule.update_unit_schedule_status(db, schedule_id, status_in.is_active)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schedule


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_schedule.delete_unit_schedule(db, schedule_id):
        raise HTTPException(status_code=404, detail="Schedule not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{schedule_id}/sessions/generate", response_model=List[SessionOut], status_code=status.HTTP_201_CREATED)
def generate_schedule_sessions(
    schedule_id: int,
    scope: Literal["week", "term"] = Query(default="week"),
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    schedule = crud_schedule.get_unit_schedule(db, schedule_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return crud_session.generate_sessions_for_schedule(db, schedule, scope)
