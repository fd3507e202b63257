from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BusinessRuleError

DUPLICATE_MESSAGE = "A record with the same unique value already exists"


def commit(db: Session, conflict_message: str = DUPLICATE_MESSAGE) -> None:
    """Commit, turning unique-constraint violations into BusinessRuleError."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BusinessRuleError(conflict_message)


def flush(db: Session, conflict_message: str = DUPLICATE_MESSAGE) -> None:
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise BusinessRuleError(conflict_message)


def add_row(db: Session, obj, conflict_message: str = DUPLICATE_MESSAGE):
    db.add(obj)
    commit(db, conflict_message)
    db.refresh(obj)
    return obj


def save_changes(db: Session, obj, updates: dict, conflict_message: str = DUPLICATE_MESSAGE):
    """Copy `updates` onto a loaded row and commit."""
    for field, value in updates.items():
        setattr(obj, field, value)
    commit(db, conflict_message)
    db.refresh(obj)
    return obj


def delete_row(db: Session, obj) -> None:
    db.delete(obj)
    db.commit()


def as_dict(obj) -> dict:
    return {column.name: getattr(obj, column.name) for column in obj.__table__.columns}
