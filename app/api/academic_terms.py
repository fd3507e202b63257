from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES
from app.crud import academic_term as crud_term
from app.schemas.academic_term import AcademicTermCreate, AcademicTermUpdate, AcademicTermOut

router = APIRouter()


@router.get("", response_model=List[AcademicTermOut])
def list_terms(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_term.get_all_academic_terms(db)


@router.post("", response_model=AcademicTermOut, status_code=status.HTTP_201_CREATED)
def create_term(
    term_in: AcademicTermCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    return crud_term.create_academic_term(db, term_in.model_dump())


@router.get("/active", response_model=AcademicTermOut)
def active_term(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    term = crud_term.get_active_academic_term(db)
    if not term:
        raise HTTPException(status_code=404, detail="No active academic term")
    return term


@router.patch("/{term_id}", response_model=AcademicTermOut)
def update_term(
    term_id: int,
    term_in: AcademicTermUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    term = crud_term.update_academic_term(db, term_id, term_in.changes())
    if not term:
        raise HTTPException(status_code=404, detail="Academic term not found")
    return term


@router.delete("/{term_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_term(
    term_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_term.delete_academic_term(db, term_id):
        raise HTTPException(status_code=404, detail="Academic term not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
