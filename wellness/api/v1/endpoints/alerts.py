import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from wellness import crud
from wellness.api import deps
from wellness.core.config import settings
from wellness.core.errors import InvalidInput
from wellness.models.user import Role
from wellness.schemas.alert import AlertCreate, AlertList, AlertOut, MarkReadResult
from wellness.schemas.auth import Principal
from wellness.utils.timezone import parse_datetime, utcnow

logger = logging.getLogger(__name__)

router = APIRouter()

staff = deps.require_roles(*Role.STAFF)


@router.get("", response_model=AlertList)
def list_alerts(
    since: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(staff),
) -> Any:
    """
    Latest alerts addressed to the caller's display name.
    """
    try:
        since_at = parse_datetime(since) if since else None
    except ValueError:
        raise InvalidInput("Invalid date", "since must be YYYY-MM-DD or ISO-8601")
    alerts = crud.alert.list_for_user(
        db, for_user=principal.name, since=since_at, limit=settings.ALERTS_LIST_LIMIT
    )
    return {"alerts": alerts}


@router.post("/mark-read", response_model=MarkReadResult)
def mark_alerts_read(
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(staff),
) -> Any:
    updated = crud.alert.mark_all_read(db, for_user=principal.name, read_at=utcnow())
    db.commit()
    if updated:
        logger.info(f"Marked {updated} alerts read for {principal.name}")
    return MarkReadResult(updated=updated)


@router.post("", response_model=AlertOut, status_code=status.HTTP_201_CREATED)
def create_alert(
    payload: AlertCreate,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(deps.require_roles(Role.ADMIN)),
    _json: None = Depends(deps.require_json),
) -> Any:
    alert = crud.alert.create(db, obj_in=payload)
    db.commit()
    logger.info(f"Alert {alert.id} queued for {alert.for_user}")
    return alert
