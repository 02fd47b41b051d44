from wellness.utils.timezone import utcnow
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from wellness.db.base import Base, JSONType


class QuestionnaireSubmission(Base):
    """Self-reported answers plus the server-computed score. Never edited."""

    __tablename__ = "questionnaire_submissions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    answers = Column(JSONType, nullable=False)
    computed = Column(JSONType, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="submissions")

    __table_args__ = (
        Index("idx_questionnaire_user_created", "user_id", "created_at"),
    )
