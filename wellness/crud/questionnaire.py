from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from wellness.models.questionnaire import QuestionnaireSubmission


class CRUDQuestionnaire:
    def create(self, db: Session, *, user_id: int, answers: Dict[str, Any], computed: Dict[str, Any]) -> QuestionnaireSubmission:
        db_obj = QuestionnaireSubmission(user_id=user_id, answers=answers, computed=computed)
        db.add(db_obj)
        db.flush()
        return db_obj

    def latest_for_user(self, db: Session, *, user_id: int) -> Optional[QuestionnaireSubmission]:
        return (
            db.query(QuestionnaireSubmission)
            .filter(QuestionnaireSubmission.user_id == user_id)
            .order_by(QuestionnaireSubmission.created_at.desc(), QuestionnaireSubmission.id.desc())
            .first()
        )

    def latest_per_user(self, db: Session) -> List[QuestionnaireSubmission]:
        """One submission per user, the most recent one."""
        rows = (
            db.query(QuestionnaireSubmission)
            .order_by(QuestionnaireSubmission.created_at.desc(), QuestionnaireSubmission.id.desc())
            .all()
        )
        latest: Dict[int, QuestionnaireSubmission] = {}
        for row in rows:
            latest.setdefault(row.user_id, row)
        return list(latest.values())

    def remove_for_user(self, db: Session, *, user_id: int) -> int:
        return (
            db.query(QuestionnaireSubmission)
            .filter(QuestionnaireSubmission.user_id == user_id)
            .delete(synchronize_session=False)
        )


questionnaire = CRUDQuestionnaire()
