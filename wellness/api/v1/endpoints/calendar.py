from typing import Any, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wellness.api import deps
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.services.rollups import RollupService

router = APIRouter()


@router.get("")
def get_calendar(
    start: Optional[str] = None,
    end: Optional[str] = None,
    nutritionist: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(deps.require_roles(*Role.STAFF)),
) -> Any:
    """
    Follow-ups scheduled between ``start`` and ``end`` (inclusive days, UTC).
    """
    events = RollupService(db).calendar(principal, start=start, end=end, nutritionist=nutritionist)
    return {"events": events}
