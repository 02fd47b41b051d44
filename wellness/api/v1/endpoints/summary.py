from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from wellness.api import deps
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.schemas.summary import SummaryResponse
from wellness.services.rollups import RollupService

router = APIRouter()


@router.get("", response_model=SummaryResponse)
def get_summary(
    status_filter: Optional[str] = Query(None, alias="status"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    nutritionist: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(deps.require_roles(*Role.STAFF)),
) -> Any:
    return RollupService(db).summary(
        principal, status=status_filter, start=date_from, end=date_to, nutritionist=nutritionist
    )
