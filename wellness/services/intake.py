import base64
import binascii
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wellness import crud
from wellness.core.config import settings
from wellness.core.errors import InternalFailure, InvalidInput
from wellness.schemas.client import NewClientCreate, NewClientCreated, PlanFile
from wellness.schemas.followup import FollowupFields
from wellness.services.followup_lifecycle import STATUS_CHOICES_MESSAGE, FollowupLifecycle, normalize_status
from wellness.utils.timezone import utcnow

logger = logging.getLogger(__name__)

DEFAULT_PLAN_FILE_TYPE = "application/octet-stream"


class ClientIntakeService:
    """Onboards a client: intake record, master record upsert and the first follow-up.

    The three writes share one transaction. Re-running the intake for the same
    (company_id, client_id) updates the master record and appends another
    intake record and follow-up.
    """

    def __init__(self, db: Session, max_plan_file_bytes: Optional[int] = None):
        self.db = db
        self.max_plan_file_bytes = max_plan_file_bytes or settings.MAX_PLAN_FILE_BYTES
        self.lifecycle = FollowupLifecycle(db)

    def _resolve_company(self, payload: NewClientCreate):
        if payload.company_id:
            company = crud.company.get(self.db, payload.company_id)
            if company is None:
                raise InvalidInput(f"Unknown company: {payload.company_id}")
            return company
        if payload.company_name and payload.company_name.strip():
            company = crud.company.get_by_name(self.db, name=payload.company_name)
            if company is None:
                raise InvalidInput(f"Unknown company: {payload.company_name.strip()}")
            return company
        raise InvalidInput("company_id or company_name is required")

    def _plan_file_columns(self, plan: Optional[PlanFile]) -> dict:
        if plan is None or not plan.name or not plan.base64:
            return {}
        if plan.size is not None and plan.size < 0:
            raise InvalidInput("Invalid file size")

        # the stored size is measured from the payload; the declared one is ignored
        data = plan.base64.strip()
        too_large = InvalidInput(f"File too large. Max {self.max_plan_file_bytes // (1024 * 1024)} MB.")
        if len(data) * 3 // 4 - data.count("=") > self.max_plan_file_bytes:
            raise too_large
        try:
            size = len(base64.b64decode(data, validate=True))
        except (binascii.Error, ValueError):
            raise InvalidInput("Invalid file encoding", "given_plan_file.base64 is not valid base64")
        if size > self.max_plan_file_bytes:
            raise too_large
        return {
            "plan_file_name": plan.name[:200],
            "plan_file_type": plan.type or DEFAULT_PLAN_FILE_TYPE,
            "plan_file_size": size,
            "plan_file_base64": data,
            "plan_file_uploaded_at": utcnow(),
        }

    def create(self, payload: NewClientCreate, created_by: str) -> NewClientCreated:
        name = (payload.name or "").strip()
        if not name:
            raise InvalidInput("name is required")

        status = normalize_status(payload.status)
        if status is None:
            raise InvalidInput(STATUS_CHOICES_MESSAGE)

        company = self._resolve_company(payload)
        client_id = payload.client_id or crud.client.max_client_id(self.db) + 1
        plan_columns = self._plan_file_columns(payload.given_plan_file)

        try:
            crud.intake.create(
                self.db,
                values={
                    "company_id": company.company_id,
                    "company_name": company.name,
                    "client_id": client_id,
                    "emp_id": payload.emp_id,
                    "name": name,
                    "contact_info": payload.contact_info,
                    "age": payload.age,
                    "medical_history": payload.medical_history,
                    "current_condition": payload.current_condition,
                    "assigned_nutritionist": payload.assigned_nutritionist,
                    "first_followup_at": payload.first_followup_at,
                    "status": status,
                    "requirements": payload.requirements,
                    "present_readings": payload.present_readings,
                    "next_target": payload.next_target,
                    "given_plan": payload.given_plan,
                    "notes": payload.notes,
                    "created_by": created_by,
                    "updated_by": created_by,
                    **plan_columns,
                },
            )
            crud.client.upsert(
                self.db,
                company_id=company.company_id,
                client_id=client_id,
                values={
                    "name": name,
                    "emp_id": payload.emp_id,
                    "contact_info": payload.contact_info or "",
                    "age": payload.age,
                    "medical_history": payload.medical_history or "",
                    "current_condition": payload.current_condition or "",
                    "assigned_nutritionist": payload.assigned_nutritionist or "",
                },
            )
            self.lifecycle.build(
                FollowupFields(
                    scheduled_at=payload.first_followup_at or utcnow(),
                    status=status,
                    notes=payload.notes or "",
                    assigned_nutritionist=payload.assigned_nutritionist or None,
                    requirements=payload.requirements,
                    present_readings=payload.present_readings,
                    next_target=payload.next_target,
                    given_plan=payload.given_plan or "",
                ),
                company_id=company.company_id,
                client_id=client_id,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Client intake failed for company={company.company_id} client={client_id}: {e}")
            raise InternalFailure("Failed to create client", str(e))

        logger.info(
            f"✅ Client intake: company={company.company_id} client={client_id} "
            f"nutritionist={payload.assigned_nutritionist or '-'} by {created_by}"
        )
        return NewClientCreated(company_id=company.company_id, client_id=client_id)
