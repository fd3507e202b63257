from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES
from app.crud import course as crud_course
from app.crud import unit as crud_unit
from app.crud import enrollment as crud_enrollment
from app.schemas.organization import CourseCreate, CourseUpdate, CourseOut, CourseWithLevel
from app.schemas.unit import UnitOut
from app.schemas.enrollment import EnrollmentWithStudent

router = APIRouter()


@router.get("", response_model=List[CourseWithLevel])
def list_courses(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_course.get_all_courses(db)


@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(
    course_in: CourseCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    return crud_course.create_course(db, course_in.model_dump())


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    course = crud_course.get_course(db, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.put("/{course_id}", response_model=CourseOut)
def update_course(
    course_id: int,
    course_in: CourseUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    course = crud_course.update_course(db, course_id, course_in.changes())
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_course.delete_course(db, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{course_id}/units", response_model=List[UnitOut])
def course_units(course_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_unit.get_units_by_course(db, course_id)


@router.get("/{course_id}/enrollments", response_model=List[EnrollmentWithStudent])
def course_enrollments(course_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    if not crud_course.get_course(db, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return crud_enrollment.get_enrollments_by_course(db, course_id)
