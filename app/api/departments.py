from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES
from app.crud import department as crud_department
from app.crud import course as crud_course
from app.schemas.organization import (
    DepartmentCreate, DepartmentUpdate, DepartmentOut, SectionOut, CourseOut, LevelOut,
)

router = APIRouter()


@router.get("", response_model=List[DepartmentOut])
def list_departments(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_department.get_all_departments(db)


@router.post("", response_model=DepartmentOut, status_code=status.HTTP_201_CREATED)
def create_department(
    department_in: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    return crud_department.create_department(db, department_in.model_dump())


@router.get("/{department_id}", response_model=DepartmentOut)
def get_department(department_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    department = crud_department.get_department(db, department_id)
    if not department:
        raise HTTPException(status_code=404, detail="Department not found")
    return department


@router.put("/{department_id}", response_model=DepartmentOut)
def update_department(
    department_id: int,
    department_in: DepartmentUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    department = crud_department.update_department(
        db, department_id, department_in.changes()
    )
    if not department:
        raise HTTPException(status_code=404, detail="Department not found")
    return department


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_department(
    department_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_department.delete_department(db, department_id):
        raise HTTPException(status_code=404, detail="Department not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{department_id}/sections", response_model=List[SectionOut])
def department_sections(department_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_department.get_sections_by_department(db, department_id)


@router.get("/{department_id}/courses", response_model=List[CourseOut])
def department_courses(department_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_course.get_courses_by_department(db, department_id)


@router.get("/{department_id}/levels", response_model=List[LevelOut])
def department_levels(department_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_department.get_levels_by_department(db, department_id)
