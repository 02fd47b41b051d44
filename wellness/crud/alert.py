from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from wellness.models.alert import Alert
from wellness.schemas.alert import AlertCreate


class CRUDAlert:
    def create(self, db: Session, *, obj_in: AlertCreate) -> Alert:
        db_obj = Alert(**obj_in.model_dump())
        db.add(db_obj)
        db.flush()
        return db_obj

    def list_for_user(
        self, db: Session, *, for_user: str, since: Optional[datetime] = None, limit: int = 50
    ) -> List[Alert]:
        query = db.query(Alert).filter(Alert.for_user == for_user)
        if since is not None:
            query = query.filter(Alert.created_at >= since)
        return query.order_by(Alert.created_at.desc(), Alert.id.desc()).limit(limit).all()

    def mark_all_read(self, db: Session, *, for_user: str, read_at: datetime) -> int:
        # already-read rows keep their original timestamp
        return (
            db.query(Alert)
            .filter(Alert.for_user == for_user, Alert.read_at.is_(None))
            .update({Alert.read_at: read_at}, synchronize_session=False)
        )


alert = CRUDAlert()
