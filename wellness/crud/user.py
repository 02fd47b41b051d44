from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from wellness.core.security import get_password_hash, verify_password
from wellness.models.user import User


class CRUDUser:
    def create(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        password: str,
        role: str,
        client_id: Optional[int] = None,
        company_id: Optional[int] = None,
    ) -> User:
        db_obj = User(
            name=name,
            email=email,
            role=role,
            password_hash=get_password_hash(password),
            client_id=client_id,
            company_id=company_id,
        )
        db.add(db_obj)
        db.flush()
        return db_obj

    def get(self, db: Session, id: int) -> Optional[User]:
        return db.query(User).filter(User.id == id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_many(self, db: Session, ids: Iterable[int]) -> List[User]:
        ids = list(set(ids))
        if not ids:
            return []
        return db.query(User).filter(User.id.in_(ids)).all()

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def update(self, db: Session, *, db_obj: User, update_data: Dict[str, Any]) -> User:
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.flush()
        return db_obj

    def remove(self, db: Session, *, db_obj: User) -> None:
        db.delete(db_obj)
        db.flush()


# Create instance that can be imported directly
user = CRUDUser()
