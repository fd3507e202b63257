import logging
from sqlalchemy.orm import Session
from app.db.models.user import User
from app.core.security import verify_password
from app.crud.utils import add_row, save_changes

logger = logging.getLogger(__name__)

USER_CONFLICT = "Username, admission number or staff ID already exists"


def get_user(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def get_user_by_admission_number(db: Session, admission_number: str):
    return db.query(User).filter(User.admission_number == admission_number).first()


def get_user_by_staff_id(db: Session, staff_id: str):
    return db.query(User).filter(User.staff_id == staff_id).first()


def get_all_users(db: Session):
    return db.query(User).order_by(User.id).all()


def get_users_by_role(db: Session, role: str):
    return db.query(User).filter(User.role == role).order_by(User.id).all()


def create_user(db: Session, user_data: dict):
    """Insert a user. The password must already be hashed and
    username / admission number / staff ID uniqueness checked by the caller."""
    db_user = add_row(db, User(**user_data), USER_CONFLICT)
    logger.info(f"Created user {db_user.username} (id={db_user.id}, role={db_user.role})")
    return db_user


def update_user(db: Session, user_id: int, updates: dict):
    user = get_user(db, user_id)
    if not user:
        return None
    return save_changes(db, user, updates, USER_CONFLICT)


def authenticate(db: Session, username: str, password: str):
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password):
        return None
    return user
