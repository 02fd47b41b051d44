from wellness.utils.timezone import utcnow
from sqlalchemy import Column, Integer, String, DateTime, Text, Index, UniqueConstraint
from wellness.db.base import Base


class Client(Base):
    """Master record of an enrolled employee, one per (company_id, client_id)."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, nullable=False, index=True)
    client_id = Column(Integer, nullable=False, index=True)
    emp_id = Column(Integer, nullable=True)

    name = Column(String(200), nullable=False)
    age = Column(Integer, nullable=True)
    contact_info = Column(String(255), nullable=True)
    medical_history = Column(Text, nullable=True)
    current_condition = Column(Text, nullable=True)
    assigned_nutritionist = Column(String(200), nullable=True)  # name, not a user id

    requirements = Column(Text, nullable=True)
    present_readings = Column(Text, nullable=True)
    next_target = Column(Text, nullable=True)
    given_plan = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("company_id", "client_id", name="uq_clients_company_client"),
    )


class IntakeRecord(Base):
    """Original onboarding submission; owned separately from the master record."""

    __tablename__ = "intake_records"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, nullable=False)
    company_name = Column(String(200), nullable=True)
    client_id = Column(Integer, nullable=False)
    emp_id = Column(Integer, nullable=True)

    name = Column(String(200), nullable=True)
    contact_info = Column(String(255), nullable=True)
    age = Column(Integer, nullable=True)
    medical_history = Column(Text, nullable=True)
    current_condition = Column(Text, nullable=True)
    assigned_nutritionist = Column(String(200), nullable=True)
    first_followup_at = Column(DateTime, nullable=True)
    status = Column(String(20), nullable=True)

    requirements = Column(Text, nullable=True)
    present_readings = Column(Text, nullable=True)
    next_target = Column(Text, nullable=True)
    given_plan = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Optional diet plan attachment, stored inline
    plan_file_name = Column(String(200), nullable=True)
    plan_file_type = Column(String(100), nullable=True)
    plan_file_size = Column(Integer, nullable=True)
    plan_file_base64 = Column(Text, nullable=True)
    plan_file_uploaded_at = Column(DateTime, nullable=True)

    created_by = Column(String(200), nullable=True)
    updated_by = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("idx_intake_records_company_client", "company_id", "client_id"),
    )

    @property
    def given_plan_file(self):
        if not self.plan_file_name:
            return None
        return {
            "name": self.plan_file_name,
            "type": self.plan_file_type,
            "size": self.plan_file_size,
            "base64": self.plan_file_base64,
            "uploaded_at": self.plan_file_uploaded_at,
        }
