import uuid
from datetime import datetime
from typing import Optional, Sequence
from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from core.helper import LIKE_ESCAPE, contains_pattern, utc_now
from models.BulkCommunicationLog import COMMUNICATION_SENT, BulkCommunicationLog
from models.User import User


def get_communication_by_id(db: Session, id: uuid.UUID):
    """(BulkCommunicationLog, sender User | None) or None"""
    stmt = (
        select(BulkCommunicationLog, User)
        .outerjoin(User, BulkCommunicationLog.sender_id == User.id)
        .where(BulkCommunicationLog.id == id)
    )
    return db.execute(stmt).first()


def get_all_communications(
    db: Session, page: int, limit: int, search: Optional[str] = None
) -> tuple[Sequence, int]:
    conditions = []
    if search:
        search_pattern = contains_pattern(search)
        conditions.append(
            (BulkCommunicationLog.subject.ilike(search_pattern, escape=LIKE_ESCAPE))
            | (BulkCommunicationLog.body.ilike(search_pattern, escape=LIKE_ESCAPE))
        )
    where = and_(True, *conditions)

    stmt = (
        select(BulkCommunicationLog, User)
        .outerjoin(User, BulkCommunicationLog.sender_id == User.id)
        .where(where)
        .order_by(BulkCommunicationLog.sent_at.desc(), BulkCommunicationLog.id)
        .limit(limit)
        .offset((page - 1) * limit)
    )
    rows = db.execute(stmt).all()

    count_stmt = select(func.count(BulkCommunicationLog.id)).where(where)
    total = db.execute(count_stmt).scalar() or 0
    return rows, int(total)


def insert_communication(
    db: Session,
    sender_id: Optional[uuid.UUID],
    subject: str,
    body: str,
    recipient_type: str,
    status: str = COMMUNICATION_SENT,
    recipient_count: int = 0,
    now: Optional[datetime] = None,
    is_commit: bool = True,
) -> BulkCommunicationLog:
    if now is None:
        now = utc_now()
    communication = BulkCommunicationLog(
        sender_id=sender_id,
        subject=subject,
        body=body,
        recipient_type=recipient_type,
        status=status,
        recipient_count=recipient_count,
        sent_at=now,
    )
    db.add(communication)
    if is_commit:
        db.commit()
    return communication
