# app/api/enrollments.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_roles, MANAGER_ROLES
from app.crud import enrollment as crud_enrollment
from app.crud import school_class as crud_class
from app.schemas.enrollment import (
    EnrollmentBatchCreate, EnrollmentUpdate, EnrollmentOut, EnrollmentWithStudent,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _serialize(enrollments):
    return [
        EnrollmentOut.model_validate(e).model_dump(by_alias=True)
        for e in enrollments
    ]


@router.get("", response_model=List[EnrollmentWithStudent])
def list_enrollments(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return crud_enrollment.get_all_enrollments(db)


@router.post("", status_code=status.HTTP_201_CREATED)
def enroll_students(
    batch: EnrollmentBatchCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*MANAGER_ROLES)),
):
    """Enroll several students into one class.

    201 with the created enrollments when all succeed, 207 with created and
    refused students when some fail, 400 when none could be enrolled.
    """
    school_class = crud_class.get_class(db, batch.class_id)
    if not school_class:
        raise HTTPException(status_code=404, detail="Class not found")

    created, errors = crud_enrollment.enroll_students(
        db,
        batch.student_ids,
        class_id=school_class.id,
        course_id=batch.course_id or school_class.course_id,
        term_id=batch.term_id or school_class.term_id,
    )
    if errors:
        logger.warning(f"Enrollment into class {school_class.id} refused: {errors}")
    if not created:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Enrollment failed", "errors": errors},
        )
    if errors:
        return JSONResponse(
            status_code=207,
            content=jsonable_encoder({
                "message": "Some students could not be enrolled",
                "enrollments": _serialize(created),
                "errors": errors,
            }),
        )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=jsonable_encoder(_serialize(created)),
    )


@router.patch("/{enrollment_id}", response_model=EnrollmentOut)
def update_enrollment(
    enrollment_id: int,
    enrollment_in: EnrollmentUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*MANAGER_ROLES)),
):
    enrollment = crud_enrollment.update_enrollment(db, enrollment_id, enrollment_in.changes())
    if not enrollment:
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return enrollment


@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_enrollment(
    enrollment_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*MANAGER_ROLES)),
):
    if not crud_enrollment.delete_enrollment(db, enrollment_id):
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
