from typing import Any, Dict, Iterable, List, Optional, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from wellness.models.client import Client, IntakeRecord


class CRUDClient:
    def get(self, db: Session, *, company_id: int, client_id: int) -> Optional[Client]:
        return (
            db.query(Client)
            .filter(Client.company_id == company_id, Client.client_id == client_id)
            .first()
        )

    def get_by_client_id(self, db: Session, *, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.client_id == client_id).order_by(Client.id.asc()).first()

    def get_many_by_pairs(self, db: Session, pairs: Iterable[Tuple[int, int]]) -> List[Client]:
        pairs = set(pairs)
        if not pairs:
            return []
        rows = db.query(Client).filter(Client.client_id.in_(sorted({clid for _, clid in pairs}))).all()
        return [c for c in rows if (c.company_id, c.client_id) in pairs]

    def list_for_company(self, db: Session, *, company_id: int, q: Optional[str] = None) -> List[Client]:
        query = db.query(Client).filter(Client.company_id == company_id)
        if q:
            pattern = f"%{q.strip().lower()}%"
            conditions = [
                func.lower(Client.name).like(pattern),
                func.lower(Client.contact_info).like(pattern),
            ]
            if q.strip().isdigit():
                conditions.append(Client.client_id == int(q.strip()))
            query = query.filter(or_(*conditions))
        return query.order_by(Client.client_id.asc()).all()

    def list_all(self, db: Session) -> List[Client]:
        return db.query(Client).order_by(Client.company_id.asc(), Client.client_id.asc()).all()

    def count_by_company(self, db: Session) -> Dict[int, int]:
        rows = db.query(Client.company_id, func.count(Client.id)).group_by(Client.company_id).all()
        return {cid: total for cid, total in rows}

    def max_client_id(self, db: Session) -> int:
        return max(
            db.query(func.max(Client.client_id)).scalar() or 0,
            db.query(func.max(IntakeRecord.client_id)).scalar() or 0,
        )

    def upsert(self, db: Session, *, company_id: int, client_id: int, values: Dict[str, Any]) -> Client:
        db_obj = self.get(db, company_id=company_id, client_id=client_id)
        if db_obj is None:
            db_obj = Client(company_id=company_id, client_id=client_id)
            db.add(db_obj)
        for field, value in values.items():
            setattr(db_obj, field, value)
        db.flush()
        return db_obj

    def update(self, db: Session, *, db_obj: Client, update_data: Dict[str, Any]) -> Client:
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.flush()
        return db_obj

    def remove(self, db: Session, *, db_obj: Client) -> None:
        db.delete(db_obj)
        db.flush()


class CRUDIntake:
    def get(self, db: Session, *, company_id: int, client_id: int) -> Optional[IntakeRecord]:
        # intake rows are appended, the newest one is authoritative
        return (
            db.query(IntakeRecord)
            .filter(IntakeRecord.company_id == company_id, IntakeRecord.client_id == client_id)
            .order_by(IntakeRecord.id.desc())
            .first()
        )

    def list_all(self, db: Session) -> List[IntakeRecord]:
        return db.query(IntakeRecord).order_by(IntakeRecord.id.asc()).all()

    def create(self, db: Session, *, values: Dict[str, Any]) -> IntakeRecord:
        db_obj = IntakeRecord(**values)
        db.add(db_obj)
        db.flush()
        return db_obj

    def remove_for_client(self, db: Session, *, company_id: int, client_id: int) -> int:
        return (
            db.query(IntakeRecord)
            .filter(IntakeRecord.company_id == company_id, IntakeRecord.client_id == client_id)
            .delete(synchronize_session=False)
        )


client = CRUDClient()
intake = CRUDIntake()
