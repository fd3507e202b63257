from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_roles, STAFF_ROLES
from app.crud import record_of_work as crud_record
from app.crud import unit_session as crud_session
from app.schemas.record_of_work import RecordOfWorkCreate, RecordOfWorkUpdate, RecordOfWorkOut

router = APIRouter()


@router.post("", response_model=RecordOfWorkOut, status_code=status.HTTP_201_CREATED)
def create_record(
    record_in: RecordOfWorkCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    if not crud_session.get_unit_session(db, record_in.session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return crud_record.create_record_of_work(db, record_in.model_dump())


@router.patch("/{record_id}", response_model=RecordOfWorkOut)
def update_record(
    record_id: int,
    record_in: RecordOfWorkUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*STAFF_ROLES)),
):
    record = crud_record.update_record_of_work(db, record_id, record_in.changes())
    if not record:
        raise HTTPException(status_code=404, detail="Record of work not found")
    return record
