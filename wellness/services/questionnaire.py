import logging

from sqlalchemy.orm import Session

from wellness import crud
from wellness.risk_scoring import Answers, score
from wellness.schemas.questionnaire import SubmissionOut

logger = logging.getLogger(__name__)


class QuestionnaireService:
    def __init__(self, db: Session):
        self.db = db

    def submit(self, user_id: int, answers: Answers) -> SubmissionOut:
        result = score(answers)
        submission = crud.questionnaire.create(
            self.db,
            user_id=user_id,
            answers=answers.model_dump(),
            computed=result.model_dump(),
        )
        self.db.commit()
        logger.info(
            f"Questionnaire {submission.id} from user {user_id}: "
            f"score={result.total_score} ({result.risk_category})"
        )
        return SubmissionOut.model_validate(submission)

    def latest(self, user_id: int):
        submission = crud.questionnaire.latest_for_user(self.db, user_id=user_id)
        return SubmissionOut.model_validate(submission) if submission else None
