from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES
from app.crud import department as crud_department
from app.crud import course as crud_course
from app.schemas.organization import LevelCreate, LevelUpdate, LevelOut, CourseOut

router = APIRouter()


@router.get("", response_model=List[LevelOut])
def list_levels(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_department.get_all_levels(db)


@router.post("", response_model=LevelOut, status_code=status.HTTP_201_CREATED)
def create_level(
    level_in: LevelCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    return crud_department.create_level(db, level_in.model_dump())


@router.get("/{level_id}", response_model=LevelOut)
def get_level(level_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    level = crud_department.get_level(db, level_id)
    if not level:
        raise HTTPException(status_code=404, detail="Level not found")
    return level


@router.put("/{level_id}", response_model=LevelOut)
def update_level(
    level_id: int,
    level_in: LevelUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    level = crud_department.update_level(db, level_id, level_in.changes())
    if not level:
        raise HTTPException(status_code=404, detail="Level not found")
    return level


@router.delete("/{level_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_level(
    level_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_department.delete_level(db, level_id):
        raise HTTPException(status_code=404, detail="Level not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{level_id}/courses", response_model=List[CourseOut])
def level_courses(level_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_course.get_courses_by_level(db, level_id)
