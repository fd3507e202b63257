import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BusinessRuleError
from app.db.models.academic_term import AcademicTerm
from app.crud.utils import commit, delete_row

logger = logging.getLogger(__name__)


def get_academic_term(db: Session, term_id: int):
    return db.query(AcademicTerm).filter(AcademicTerm.id == term_id).first()


def get_all_academic_terms(db: Session):
    return db.query(AcademicTerm).order_by(AcademicTerm.start_date).all()


def get_active_academic_term(db: Session):
    return (
        db.query(AcademicTerm)
        .filter(AcademicTerm.is_active.is_(True))
        .order_by(AcademicTerm.id.desc())
        .first()
    )


def resolve_term_id(db: Session, term_id: Optional[int]) -> int:
    """Return `term_id`, or the active term's id when none was given."""
    if term_id is not None:
        if not get_academic_term(db, term_id):
            raise BusinessRuleError(f"Academic term {term_id} not found")
        return term_id
    term = get_active_academic_term(db)
    if not term:
        raise BusinessRuleError("No active academic term")
    return term.id


def _deactivate_others(db: Session, term_id: Optional[int]) -> None:
    query = db.query(AcademicTerm).filter(AcademicTerm.is_active.is_(True))
    if term_id is not None:
        query = query.filter(AcademicTerm.id != term_id)
    query.update({AcademicTerm.is_active: False}, synchronize_session=False)


def create_academic_term(db: Session, data: dict):
    if data.get("is_active"):
        _deactivate_others(db, None)
    term = AcademicTerm(**data)
    db.add(term)
    commit(db)
    db.refresh(term)
    logger.info(f"Created academic term {term.name} (active={term.is_active})")
    return term


def update_academic_term(db: Session, term_id: int, updates: dict):
    """Apply `updates`; activating a term deactivates every other one in the same commit."""
    term = get_academic_term(db, term_id)
    if not term:
        return None
    start = updates.get("start_date", term.start_date)
    end = updates.get("end_date", term.end_date)
    if end <= start:
        raise BusinessRuleError("End date must be after start date")
    if updates.get("is_active") is True:
        _deactivate_others(db, term_id)
    for field, value in updates.items():
        setattr(term, field, value)
    commit(db)
    db.refresh(term)
    if updates.get("is_active") is True:
        logger.info(f"Academic term {term.id} is now the active term")
    return term


def delete_academic_term(db: Session, term_id: int) -> bool:
    term = get_academic_term(db, term_id)
    if not term:
        return False
    delete_row(db, term)
    return True
