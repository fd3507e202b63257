# app/api/classes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, ADMIN_ROLES
from app.crud import school_class as crud_class
from app.crud import enrollment as crud_enrollment
from app.schemas.school_class import ClassCreate, ClassUpdate, ClassOut
from app.schemas.unit import UnitOut, UnitAssignment
from app.schemas.enrollment import EnrollmentWithStudent

router = APIRouter()


def _class_or_404(db: Session, class_id: int):
    school_class = crud_class.get_class_details(db, class_id)
    if not school_class:
        raise HTTPException(status_code=404, detail="Class not found")
    return school_class


@router.get("", response_model=List[ClassOut])
def list_classes(
    term_id: Optional[int] = Query(default=None, alias="termId"),
    course_id: Optional[int] = Query(default=None, alias="courseId"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if term_id is not None:
        classes = crud_class.get_classes_by_term(db, term_id)
        if course_id is not None:
            classes = [c for c in classes if c["course_id"] == course_id]
        return classes
    if course_id is not None:
        return crud_class.get_classes_by_course(db, course_id)
    return crud_class.get_all_classes(db)


@router.post("", response_model=ClassOut, status_code=status.HTTP_201_CREATED)
def create_class(
    class_in: ClassCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    data = class_in.model_dump(exclude={"unit_ids"})
    school_class = crud_class.create_class(db, data, class_in.unit_ids)
    return crud_class.get_class_details(db, school_class.id)


@router.get("/{class_id}", response_model=ClassOut)
def get_class(class_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return _class_or_404(db, class_id)


@router.patch("/{class_id}", response_model=ClassOut)
def update_class(
    class_id: int,
    class_in: ClassUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    current = _class_or_404(db, class_id)
    updates = class_in.changes()
    start = updates.get("start_date") or current["start_date"]
    end = updates.get("end_date") or current["end_date"]
    if end < start:
        raise HTTPException(status_code=400, detail="End date must not be before start date")
    crud_class.update_class(db, class_id, updates)
    return crud_class.get_class_details(db, class_id)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_class(
    class_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    if not crud_class.delete_class(db, class_id):
        raise HTTPException(status_code=404, detail="Class not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{class_id}/units", response_model=List[UnitOut])
def class_units(class_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    _class_or_404(db, class_id)
    return crud_class.get_units_for_class(db, class_id)


@router.post("/{class_id}/units", response_model=List[UnitOut])
def assign_class_units(
    class_id: int,
    assignment: UnitAssignment,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    _class_or_404(db, class_id)
    crud_class.assign_units_to_class(db, class_id, assignment.unit_ids)
    return crud_class.get_units_for_class(db, class_id)


@router.get("/{class_id}/enrollments", response_model=List[EnrollmentWithStudent])
def class_enrollments(class_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    _class_or_404(db, class_id)
    return crud_enrollment.get_enrollments_by_class(db, class_id)
