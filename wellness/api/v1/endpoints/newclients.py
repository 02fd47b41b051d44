from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wellness.api import deps
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.schemas.client import NewClientCreate, NewClientCreated
from wellness.services.intake import ClientIntakeService

router = APIRouter()


@router.post("", response_model=NewClientCreated)
def create_new_client(
    payload: NewClientCreate,
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(deps.require_roles(*Role.STAFF)),
    _json: None = Depends(deps.require_json),
) -> Any:
    """
    Onboard a client: intake record, master record and the first follow-up.
    """
    return ClientIntakeService(db).create(payload, created_by=principal.name or "system")
