# app/api/users.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_roles, ADMIN_ROLES, MANAGER_ROLES
from app.crud import user as crud_user
from app.core.security import get_password_hash
from app.schemas.user import UserCreate, UserUpdate, UserOut, Role, role_field_problems

router = APIRouter()

ROLE_FIELDS = ("role", "department_id", "admission_number", "staff_id")


def _check_unique(db: Session, username=None, admission_number=None, staff_id=None, user_id=None):
    checks = (
        (username, crud_user.get_user_by_username, "Username already exists"),
        (admission_number, crud_user.get_user_by_admission_number, "Admission number already exists"),
        (staff_id, crud_user.get_user_by_staff_id, "Staff ID already exists"),
    )
    for value, lookup, message in checks:
        if not value:
            continue
        existing = lookup(db, value)
        if existing and existing.id != user_id:
            raise HTTPException(status_code=400, detail=message)


@router.get("", response_model=List[UserOut])
def list_users(
    role: Optional[Role] = None,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*MANAGER_ROLES)),
):
    if role:
        return crud_user.get_users_by_role(db, role)
    return crud_user.get_all_users(db)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    _check_unique(db, user_in.username, user_in.admission_number, user_in.staff_id)
    data = user_in.model_dump()
    data["password"] = get_password_hash(user_in.password)
    return crud_user.create_user(db, data)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    user = crud_user.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_roles(*ADMIN_ROLES)),
):
    user = crud_user.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    updates = user_in.changes()
    merged = {field: updates.get(field, getattr(user, field)) for field in ROLE_FIELDS}
    problems = role_field_problems(**merged)
    if problems:
        raise HTTPException(status_code=400, detail="; ".join(problems))
    _check_unique(
        db,
        updates.get("username"),
        updates.get("admission_number"),
        updates.get("staff_id"),
        user_id=user_id,
    )
    if updates.get("password"):
        updates["password"] = get_password_hash(updates["password"])
    return crud_user.update_user(db, user_id, updates)
