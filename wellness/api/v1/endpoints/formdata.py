from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wellness.api import deps
from wellness.models.user import Role
from wellness.risk_scoring import Answers
from wellness.schemas.auth import Principal
from wellness.services.questionnaire import QuestionnaireService

router = APIRouter()

any_role = deps.require_roles(*Role.ALL)


@router.get("/health")
def formdata_health(_: Principal = Depends(any_role)) -> Any:
    return {"ok": True}


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_questionnaire(
    answers: Answers,
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(any_role),
    _json: None = Depends(deps.require_json),
) -> Any:
    """
    Score a questionnaire and store it as a new submission.
    """
    doc = QuestionnaireService(db).submit(principal.id, answers)
    return {"ok": True, "doc": doc}


@router.get("/mine/latest")
def latest_questionnaire(
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(any_role),
) -> Any:
    return {"doc": QuestionnaireService(db).latest(principal.id)}
