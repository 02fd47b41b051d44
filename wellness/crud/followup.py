from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from wellness.models.followup import Followup

# Preferred date with the legacy column as fallback, usable inside queries
effective_scheduled_at = func.coalesce(Followup.scheduled_at, Followup.followup_date)


class CRUDFollowup:
    def get(self, db: Session, id: int) -> Optional[Followup]:
        return db.query(Followup).filter(Followup.id == id).first()

    def create(self, db: Session, *, values: Dict[str, Any]) -> Followup:
        db_obj = Followup(**values)
        db.add(db_obj)
        db.flush()
        return db_obj

    def list_for_client(self, db: Session, *, company_id: int, client_id: int) -> List[Followup]:
        return (
            db.query(Followup)
            .filter(Followup.company_id == company_id, Followup.client_id == client_id)
            .order_by(Followup.id.asc())
            .all()
        )

    def list_filtered(
        self,
        db: Session,
        *,
        company_id: Optional[int] = None,
        assigned_nutritionist: Optional[str] = None,
        status: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Followup]:
        """Follow-ups matching every given filter, in insertion order.

        ``start``/``end`` bound the effective scheduled time inclusively; rows
        without any date never match a bounded window.
        """
        query = db.query(Followup)
        if company_id is not None:
            query = query.filter(Followup.company_id == company_id)
        if assigned_nutritionist is not None:
            query = query.filter(Followup.assigned_nutritionist == assigned_nutritionist)
        if status is not None:
            query = query.filter(Followup.status == status)
        if start is not None:
            query = query.filter(effective_scheduled_at >= start)
        if end is not None:
            query = query.filter(effective_scheduled_at <= end)
        return query.order_by(Followup.id.asc()).all()

    def remove_for_client(self, db: Session, *, company_id: int, client_id: int) -> int:
        return (
            db.query(Followup)
            .filter(Followup.company_id == company_id, Followup.client_id == client_id)
            .delete(synchronize_session=False)
        )


followup = CRUDFollowup()
