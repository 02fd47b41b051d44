from wellness.utils.timezone import utcnow
from sqlalchemy import Column, Integer, String, DateTime, Text, Index
from wellness.db.base import Base


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, index=True)
    for_user = Column(String(200), nullable=False)  # staff display name
    title = Column(String(200), nullable=True)
    message = Column(Text, nullable=True)
    company_id = Column(Integer, nullable=True)
    client_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    read_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_alerts_for_user_created", "for_user", "created_at"),
    )
