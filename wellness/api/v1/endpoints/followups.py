from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wellness.api import deps
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.schemas.followup import FollowupCreate, FollowupOut, FollowupStatusUpdate
from wellness.services.followup_lifecycle import FollowupLifecycle

router = APIRouter()

staff = deps.require_roles(*Role.STAFF)


@router.post(
    "",
    response_model=FollowupOut,
    status_code=status.HTTP_201_CREATED,
)
def create_followup(
    payload: FollowupCreate,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(staff),
    _json: None = Depends(deps.require_json),
) -> Any:
    lifecycle = FollowupLifecycle(db)
    followup = lifecycle.create(payload, company_id=payload.company_id, client_id=payload.client_id)
    return lifecycle.present(followup)


@router.patch("/{followup_id}/status", response_model=FollowupOut)
def update_followup_status(
    followup_id: int,
    payload: FollowupStatusUpdate,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(staff),
    _json: None = Depends(deps.require_json),
) -> Any:
    """
    Overwrite the status; ``completed_at`` follows ``done``.
    """
    lifecycle = FollowupLifecycle(db)
    followup = lifecycle.update_status(followup_id, payload.status)
    return lifecycle.present(followup)
