from wellness.utils.timezone import utcnow
from sqlalchemy import Column, Integer, String, DateTime
from wellness.db.base import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, unique=True, index=True, nullable=False)
    name = Column(String(200), unique=True, nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
