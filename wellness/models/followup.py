from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy import Column, Integer, String, DateTime, Text, Float, Index
from wellness.utils.timezone import utcnow
from wellness.db.base import Base


class FollowupStatus:
    PENDING = "pending"
    DONE = "done"
    REACHED_OUT = "reached_out"

    ALL = (PENDING, DONE, REACHED_OUT)


class Followup(Base):
    __tablename__ = "followups"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, nullable=False, index=True)
    client_id = Column(Integer, nullable=False, index=True)

    scheduled_at = Column(DateTime, nullable=True)   # preferred
    followup_date = Column(DateTime, nullable=True)  # legacy alias

    status = Column(String(20), nullable=False, default=FollowupStatus.PENDING, index=True)
    completed_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=False, default="")

    assigned_nutritionist = Column(String(200), nullable=True)
    requirements = Column(Text, nullable=True)
    present_readings = Column(Text, nullable=True)
    next_target = Column(Text, nullable=True)
    given_plan = Column(Text, nullable=True)

    # Structured vitals captured at the check-in
    weight_kg = Column(Float, nullable=True)
    bmi = Column(Float, nullable=True)
    bp = Column(String(20), nullable=True)      # e.g. "120/80"
    sugar = Column(String(50), nullable=True)   # e.g. "FBS 110"

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("idx_followups_company_client_status_sched", "company_id", "client_id", "status", "scheduled_at"),
    )

    @property
    def effective_scheduled_at(self) -> Optional[datetime]:
        return self.scheduled_at if self.scheduled_at is not None else self.followup_date

    def is_overdue(self, now: datetime, after_hours: int = 48) -> bool:
        sched = self.effective_scheduled_at
        if (self.status or FollowupStatus.PENDING) != FollowupStatus.PENDING or sched is None:
            return False
        return sched < now - timedelta(hours=after_hours)
