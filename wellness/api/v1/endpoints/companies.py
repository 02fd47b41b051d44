from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from wellness import crud
from wellness.api import deps
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.schemas.client import ClientUpdate, IntakePatch
from wellness.schemas.company import CompanyOut
from wellness.schemas.followup import FollowupFields, FollowupOut
from wellness.services.followup_lifecycle import FollowupLifecycle
from wellness.services.profile import ClientProfileService
from wellness.services.rollups import RollupService

router = APIRouter()

staff = deps.require_roles(*Role.STAFF)
admin_only = deps.require_roles(Role.ADMIN)


@router.get("", response_model=List[CompanyOut])
def list_companies(
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(deps.get_current_principal),
) -> Any:
    return crud.company.list(db)


@router.get("/{company_id}/clients")
def list_company_clients(
    company_id: int,
    status_filter: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = None,
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(staff),
) -> Any:
    """
    Master clients of a company, each with its follow-ups (earliest first).
    """
    return RollupService(db).company_clients(
        principal, company_id, status=status_filter, q=q, start=date_from, end=date_to
    )


@router.get("/{company_id}/clients/{client_id}/profile")
def get_client_profile(
    company_id: int,
    client_id: int,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(staff),
) -> Any:
    return ClientProfileService(db).get_profile(company_id, client_id)


@router.patch("/{company_id}/clients/{client_id}/intake")
def update_client_intake(
    company_id: int,
    client_id: int,
    patch: IntakePatch,
    db: Session = Depends(deps.get_db),
    principal: Principal = Depends(staff),
    _json: None = Depends(deps.require_json),
) -> Any:
    """
    Edit the intake record and return the refreshed profile.
    """
    return ClientProfileService(db).update_intake(company_id, client_id, patch, editor=principal.name or "system")


@router.delete("/{company_id}/clients/{client_id}/intake")
def delete_client_intake(
    company_id: int,
    client_id: int,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(admin_only),
) -> Any:
    return ClientProfileService(db).delete_intake(company_id, client_id)


@router.put("/{company_id}/clients/{client_id}")
def update_client(
    company_id: int,
    client_id: int,
    patch: ClientUpdate,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(admin_only),
    _json: None = Depends(deps.require_json),
) -> Any:
    return ClientProfileService(db).update_client(company_id, client_id, patch)


@router.delete("/{company_id}/clients/{client_id}")
def delete_client(
    company_id: int,
    client_id: int,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(admin_only),
) -> Any:
    return ClientProfileService(db).delete_client(company_id, client_id)


@router.post(
    "/{company_id}/clients/{client_id}/followups",
    response_model=FollowupOut,
    status_code=status.HTTP_201_CREATED,
)
def create_client_followup(
    company_id: int,
    client_id: int,
    fields: FollowupFields,
    db: Session = Depends(deps.get_db),
    _: Principal = Depends(staff),
    _json: None = Depends(deps.require_json),
) -> Any:
    lifecycle = FollowupLifecycle(db)
    followup = lifecycle.create(fields, company_id=company_id, client_id=client_id)
    return lifecycle.present(followup)
