from wellness.utils.timezone import utcnow
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from wellness.db.base import Base


class Role:
    ADMIN = "admin"
    NUTRITIONIST = "nutritionist"
    CLIENT = "client"

    ALL = (ADMIN, NUTRITIONIST, CLIENT)
    STAFF = (ADMIN, NUTRITIONIST)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False)
    password_hash = Column(String(255), nullable=False)
    client_id = Column(Integer, nullable=True)
    company_id = Column(Integer, nullable=True, index=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    submissions = relationship(
        "QuestionnaireSubmission",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
