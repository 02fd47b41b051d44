import logging
from typing import Dict, Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from wellness.models.company import Company

logger = logging.getLogger(__name__)


class CRUDCompany:
    def get(self, db: Session, company_id: int) -> Optional[Company]:
        return db.query(Company).filter(Company.company_id == company_id).first()

    def get_by_name(self, db: Session, *, name: str) -> Optional[Company]:
        return db.query(Company).filter(func.lower(Company.name) == name.strip().lower()).first()

    def list(self, db: Session) -> List[Company]:
        return db.query(Company).order_by(Company.company_id.asc()).all()

    def names_by_id(self, db: Session, company_ids: Optional[Iterable[int]] = None) -> Dict[int, str]:
        query = db.query(Company.company_id, Company.name)
        if company_ids is not None:
            ids = list(set(company_ids))
            if not ids:
                return {}
            query = query.filter(Company.company_id.in_(ids))
        return {cid: name for cid, name in query.all()}

    def seed(self, db: Session, *, names: Iterable[str]) -> List[Company]:
        """Insert any missing company names with the next free ids. Safe to re-run."""
        created = []
        next_id = (db.query(func.max(Company.company_id)).scalar() or 0) + 1
        for name in names:
            name = name.strip()
            if not name or self.get_by_name(db, name=name):
                continue
            db_obj = Company(company_id=next_id, name=name)
            db.add(db_obj)
            db.flush()
            created.append(db_obj)
            next_id += 1
        if created:
            logger.info(f"Seeded {len(created)} companies")
        return created


company = CRUDCompany()
