from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from wellness.api import deps
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.schemas.directory import FormUserPatch
from wellness.services.directory import DirectoryService

router = APIRouter()

staff = deps.require_roles(*Role.STAFF)


@router.get("/clients")
def get_client_directory(
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(staff),
) -> Any:
    """
    Master clients, intake records and questionnaire users in one list.
    """
    return {"ok": True, "items": DirectoryService(db).list_items(principal)}


@router.get("/users/{user_id}")
def get_form_user(
    user_id: int,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(staff),
) -> Any:
    return DirectoryService(db).form_profile(user_id)


@router.patch("/users/{user_id}")
def update_form_user(
    user_id: int,
    patch: FormUserPatch,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(staff),
    _json: None = Depends(deps.require_json),
) -> Any:
    return DirectoryService(db).update_form_user(user_id, patch)


@router.delete("/users/{user_id}")
def delete_form_user(
    user_id: int,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(deps.require_roles(Role.ADMIN)),
) -> Any:
    return DirectoryService(db).delete_form_user(user_id)
