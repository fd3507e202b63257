# app/api/units.py
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES, MANAGER_ROLES, STAFF_ROLES
from app.db.models.user import User
from app.crud import unit as crud_unit
from app.crud import course as crud_course
from app.crud import schedule as crud_schedule
from app.crud import unit_session as crud_session
from app.crud import academic_term as crud_term
from app.crud import school_class as crud_class
from app.schemas.unit import UnitCreate, UnitUpdate, UnitOut, UnitDetail, ClassAssignment
from app.schemas.school_class import ClassOut
from app.schemas.schedule import ScheduleWithDay
from app.schemas.unit_session import SessionCreate, SessionOut, SessionWithRecordFlag

router = APIRouter()


def get_unit_or_404(db: Session, unit_id: int):
    unit = crud_unit.get_unit(db, unit_id)
    if not unit:
        raise HTTPException(status_code=404, detail="Unit not found")
    return unit


@router.get("", response_model=List[UnitDetail])
def list_units(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return crud_unit.get_units_visible_to(db, current_user)


@router.post("", response_model=UnitOut, status_code=status.HTTP_201_CREATED)
def create_unit(
    unit_in: UnitCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*MANAGER_ROLES)),
):
    if not crud_course.get_course(db, unit_in.course_id):
        raise HTTPException(status_code=400, detail="Course not found")
    data = unit_in.model_dump(exclude={"class_ids"})
    return crud_unit.create_unit(db, data, unit_in.class_ids)


@router.get("/{unit_id}", response_model=UnitDetail)
def get_unit(unit_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    unit = crud_unit.get_unit_details(db, unit_id)
    if not unit:
        raise HTTPException(status_code=404, detail="Unit not found")
    return unit


@router.put("/{unit_id}", response_model=UnitOut)
def update_unit(
    unit_id: int,
    unit_in: UnitUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*MANAGER_ROLES)),
):
    unit = crud_unit.update_unit(db, unit_id, unit_in.changes())
    if not unit:
        raise HTTPException(status_code=404, detail="Unit not found")
    return unit


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_unit(
    unit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_unit.delete_unit(db, unit_id):
        raise HTTPException(status_code=404, detail="Unit not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{unit_id}/classes", response_model=List[ClassOut])
def unit_classes(unit_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    get_unit_or_404(db, unit_id)
    return crud_class.get_classes_for_unit(db, unit_id)


@router.post("/{unit_id}/classes", response_model=List[ClassOut])
def assign_unit_classes(
    unit_id: int,
    assignment: ClassAssignment,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*MANAGER_ROLES)),
):
    get_unit_or_404(db, unit_id)
    crud_class.assign_unit_to_classes(db, unit_id, assignment.class_ids)
    return crud_class.get_classes_for_unit(db, unit_id)


@router.get("/{unit_id}/schedules", response_model=List[ScheduleWithDay])
def unit_schedules(unit_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    get_unit_or_404(db, unit_id)
    return crud_schedule.get_schedules_with_day(db, unit_id)


@router.get("/{unit_id}/sessions", response_model=List[SessionWithRecordFlag])
def unit_sessions(unit_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    get_unit_or_404(db, unit_id)
    return crud_session.get_sessions_by_unit(db, unit_id)


@router.post("/{unit_id}/sessions", response_model=SessionOut, status_code=status.HTTP_201_CREATED)
def create_unit_session(
    unit_id: int,
    session_in: SessionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    get_unit_or_404(db, unit_id)
    term_id = crud_term.resolve_term_id(db, session_in.term_id)
    return crud_session.create_unit_session(db, unit_id, session_in.model_dump(), term_id)


@router.post("/{unit_id}/sessions/generate", response_model=List[SessionOut], status_code=status.HTTP_201_CREATED)
def generate_unit_sessions(
    unit_id: int,
    scope: Literal["week", "term"] = Query(default="week"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES)),
):
    """Materialize the unit's active weekly schedules into sessions."""
    get_unit_or_404(db, unit_id)
    return crud_session.generate_sessions_for_unit(db, unit_id, scope)
