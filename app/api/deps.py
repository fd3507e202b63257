# app/api/deps.py
from typing import Iterable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.db.models.user import User
from app.core.security import decode_access_token
from app.crud import user as crud_user

ADMIN_ROLES = ("admin", "super_admin")
MANAGER_ROLES = ("admin", "super_admin", "hod")
STAFF_ROLES = ("teacher", "hod", "admin", "super_admin")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise credentials_exception
    username = payload.get("sub")
    if not username:
        raise credentials_exception
    user = crud_user.get_user_by_username(db, username)
    if not user:
        raise credentials_exception
    return user


def require_roles(*roles: str):
    """Dependency factory: the current user must hold one of `roles`."""
    allowed: Iterable[str] = roles

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current_user

    return checker


def ensure_self_or_staff(current_user: User, student_id: int) -> None:
    # students may only look at their own data
    if current_user.role == "student" and current_user.id != student_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Students can only access their own data")
