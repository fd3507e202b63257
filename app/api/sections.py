from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES
from app.crud import department as crud_department
from app.schemas.organization import SectionCreate, SectionUpdate, SectionOut, LevelOut

router = APIRouter()


@router.get("", response_model=List[SectionOut])
def list_sections(
    department_id: Optional[int] = Query(default=None, alias="departmentId"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if department_id is not None:
        return crud_department.get_sections_by_department(db, department_id)
    return crud_department.get_all_sections(db)


@router.post("", response_model=SectionOut, status_code=status.HTTP_201_CREATED)
def create_section(
    section_in: SectionCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    return crud_department.create_section(db, section_in.model_dump())


@router.get("/{section_id}", response_model=SectionOut)
def get_section(section_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    section = crud_department.get_section(db, section_id)
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section


@router.put("/{section_id}", response_model=SectionOut)
def update_section(
    section_id: int,
    section_in: SectionUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    section = crud_department.update_section(db, section_id, section_in.changes())
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(
    section_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_department.delete_section(db, section_id):
        raise HTTPException(status_code=404, detail="Section not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{section_id}/levels", response_model=List[LevelOut])
def section_levels(section_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_department.get_levels_by_section(db, section_id)
