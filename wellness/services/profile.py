"""
Single-client views and edits: the profile timeline, intake edits mirrored to
the master record, and admin maintenance of master and intake records.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from wellness import crud
from wellness.core.errors import InvalidInput, NotFound
from wellness.models.client import Client
from wellness.models.followup import Followup, FollowupStatus
from wellness.schemas.client import (
    MIRRORED_INTAKE_FIELDS,
    ClientOut,
    ClientUpdate,
    IntakeOut,
    IntakePatch,
)
from wellness.schemas.company import CompanyOut
from wellness.services.followup_lifecycle import STATUS_CHOICES_MESSAGE, FollowupLifecycle, normalize_status
from wellness.utils.timezone import utcnow

logger = logging.getLogger(__name__)


def newest_first_key(followup: Followup):
    # undated rows sink to the bottom
    sched = followup.effective_scheduled_at
    return (sched is not None, sched or datetime.min, followup.created_at or datetime.min, followup.id)


class ClientProfileService:
    def __init__(self, db: Session, overdue_after_hours: Optional[int] = None):
        self.db = db
        self.lifecycle = FollowupLifecycle(db, overdue_after_hours)

    def _get_client(self, company_id: int, client_id: int) -> Client:
        client = crud.client.get(self.db, company_id=company_id, client_id=client_id)
        if client is None:
            raise NotFound("Client not found")
        return client

    def get_profile(self, company_id: int, client_id: int, now: Optional[datetime] = None) -> dict:
        client = self._get_client(company_id, client_id)
        company = crud.company.get(self.db, company_id)
        intake = crud.intake.get(self.db, company_id=company_id, client_id=client_id)
        now = now or utcnow()

        followups: List[Followup] = sorted(
            crud.followup.list_for_client(self.db, company_id=company_id, client_id=client_id),
            key=newest_first_key,
            reverse=True,
        )

        counts = {status: 0 for status in FollowupStatus.ALL}
        for followup in followups:
            state = followup.status or FollowupStatus.PENDING
            counts[state] = counts.get(state, 0) + 1

        upcoming = min(
            (f for f in followups if f.effective_scheduled_at is not None and f.effective_scheduled_at >= now),
            key=lambda f: (f.effective_scheduled_at, f.id),
            default=None,
        )
        last_done = max(
            (f for f in followups if f.status == FollowupStatus.DONE and f.effective_scheduled_at is not None),
            key=lambda f: (f.effective_scheduled_at, f.id),
            default=None,
        )

        return {
            "company": CompanyOut.model_validate(company) if company else None,
            "client": ClientOut.model_validate(client),
            "intake": IntakeOut.model_validate(intake) if intake else None,
            "followups": [self.lifecycle.present(f, now) for f in followups],
            "counts": counts,
            "upcoming": self.lifecycle.present(upcoming, now) if upcoming else None,
            "last_done": self.lifecycle.present(last_done, now) if last_done else None,
        }

    def update_intake(self, company_id: int, client_id: int, patch: IntakePatch, editor: str) -> dict:
        """Upsert the intake record and mirror the display basics onto the master record."""
        update_data = patch.model_dump(exclude_unset=True)
        # a blank date in the form means "leave as is"
        if update_data.get("first_followup_at") is None:
            update_data.pop("first_followup_at", None)
        if update_data.get("status"):
            status = normalize_status(update_data["status"])
            if status is None:
                raise InvalidInput(STATUS_CHOICES_MESSAGE)
            update_data["status"] = status
        else:
            update_data.pop("status", None)

        master = self._get_client(company_id, client_id)
        intake = crud.intake.get(self.db, company_id=company_id, client_id=client_id)
        if intake is None:
            company = crud.company.get(self.db, company_id)
            intake = crud.intake.create(
                self.db,
                values={
                    "company_id": company_id,
                    "client_id": client_id,
                    "company_name": company.name if company else None,
                    "created_by": editor,
                },
            )
        for field, value in update_data.items():
            setattr(intake, field, value)
        intake.updated_by = editor
        intake.updated_at = utcnow()

        mirror = {k: v for k, v in update_data.items() if k in MIRRORED_INTAKE_FIELDS}
        if mirror.get("name") is None:
            mirror.pop("name", None)
        if mirror:
            crud.client.update(self.db, db_obj=master, update_data=mirror)

        self.db.commit()
        logger.info(f"Intake for company={company_id} client={client_id} updated by {editor}: {sorted(update_data)}")
        return self.get_profile(company_id, client_id)

    def update_client(self, company_id: int, client_id: int, patch: ClientUpdate) -> dict:
        update_data = patch.model_dump(exclude_unset=True)
        if not update_data:
            raise InvalidInput("No updatable fields provided")
        if "name" in update_data and not (update_data["name"] or "").strip():
            raise InvalidInput("name must not be empty")

        client = self._get_client(company_id, client_id)
        crud.client.update(self.db, db_obj=client, update_data=update_data)
        self.db.commit()
        logger.info(f"Client company={company_id} client={client_id} updated: {sorted(update_data)}")
        return {"ok": True, "client": ClientOut.model_validate(client)}

    def delete_client(self, company_id: int, client_id: int) -> dict:
        """Remove the master record and its follow-ups; the intake record stays."""
        client = self._get_client(company_id, client_id)
        removed = crud.followup.remove_for_client(self.db, company_id=company_id, client_id=client_id)
        crud.client.remove(self.db, db_obj=client)
        self.db.commit()
        logger.info(f"Deleted client company={company_id} client={client_id} and {removed} follow-ups")
        return {"ok": True, "deleted_client_id": client_id}

    def delete_intake(self, company_id: int, client_id: int) -> dict:
        """Remove the intake record only; master record and follow-ups stay."""
        removed = crud.intake.remove_for_client(self.db, company_id=company_id, client_id=client_id)
        if not removed:
            raise NotFound("Intake record not found")
        self.db.commit()
        logger.info(f"Deleted intake for company={company_id} client={client_id}")
        return {"ok": True, "deleted_client_id": client_id}

    def client_home(self, user) -> dict:
        """What a client-role user sees on login: their account and linked master record."""
        client = None
        if user.client_id is not None:
            if user.company_id is not None:
                client = crud.client.get(self.db, company_id=user.company_id, client_id=user.client_id)
            else:
                client = crud.client.get_by_client_id(self.db, client_id=user.client_id)
        return {
            "user": {
                "name": user.name,
                "email": user.email,
                "client_id": user.client_id,
                "company_id": user.company_id,
            },
            "client": ClientOut.model_validate(client) if client else None,
        }
