from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wellness.api import deps
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.services.profile import ClientProfileService

router = APIRouter()


@router.get("/home")
def get_client_home(
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(deps.require_roles(Role.CLIENT)),
    user=Depends(deps.get_current_user),
) -> Any:
    return ClientProfileService(db).client_home(user)
