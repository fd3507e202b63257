from sqlalchemy.orm import Session

from app.core.exceptions import BusinessRuleError
from app.core.timeutils import utcnow
from app.db.models.record_of_work import RecordOfWork
from app.crud.utils import add_row, save_changes

RECORD_CONFLICT = "A record of work already exists for this session"


def get_record_of_work(db: Session, record_id: int):
    return db.query(RecordOfWork).filter(RecordOfWork.id == record_id).first()


def get_record_of_work_by_session(db: Session, session_id: int):
    return db.query(RecordOfWork).filter(RecordOfWork.session_id == session_id).first()


def create_record_of_work(db: Session, data: dict):
    if get_record_of_work_by_session(db, data["session_id"]):
        raise BusinessRuleError(RECORD_CONFLICT)
    return add_row(db, RecordOfWork(**data), RECORD_CONFLICT)


def update_record_of_work(db: Session, record_id: int, updates: dict):
    record = get_record_of_work(db, record_id)
    if not record:
        return None
    updates = dict(updates, updated_at=utcnow())
    return save_changes(db, record, updates)
