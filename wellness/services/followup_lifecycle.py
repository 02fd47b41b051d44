"""
Follow-up lifecycle: creation, status overwrite and the read-time overdue flag.

Statuses are a flat overwrite (any status may be set to any other). The only
coupling is ``completed_at``, which is set when a follow-up becomes ``done``
and cleared otherwise. "Overdue" is never stored; it is derived from the wall
clock whenever a follow-up is read.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from wellness import crud
from wellness.core.config import settings
from wellness.core.errors import InvalidInput, NotFound
from wellness.models.followup import Followup, FollowupStatus
from wellness.schemas.followup import FollowupFields, FollowupOut
from wellness.utils.timezone import utcnow

logger = logging.getLogger(__name__)

STATUS_CHOICES_MESSAGE = "status must be pending | done | reached_out"


def normalize_status(value: Optional[str]) -> Optional[str]:
    """Lowercased status, ``pending`` when blank, None when not a known status."""
    status = (value or "").strip().lower() or FollowupStatus.PENDING
    return status if status in FollowupStatus.ALL else None


def is_overdue(followup: Followup, now: Optional[datetime] = None, after_hours: Optional[int] = None) -> bool:
    return followup.is_overdue(
        now or utcnow(),
        settings.OVERDUE_AFTER_HOURS if after_hours is None else after_hours,
    )


class FollowupLifecycle:
    def __init__(self, db: Session, overdue_after_hours: Optional[int] = None):
        self.db = db
        self.overdue_after_hours = (
            settings.OVERDUE_AFTER_HOURS if overdue_after_hours is None else overdue_after_hours
        )

    def present(self, followup: Followup, now: Optional[datetime] = None) -> FollowupOut:
        return FollowupOut.from_model(followup, now or utcnow(), self.overdue_after_hours)

    def build(
        self,
        fields: FollowupFields,
        *,
        company_id: Optional[int],
        client_id: Optional[int],
    ) -> Followup:
        """Validate and stage a new follow-up in the session without committing."""
        if company_id is None or client_id is None:
            raise InvalidInput("company_id and client_id are required")

        status = normalize_status(fields.status)
        if status is None:
            raise InvalidInput(STATUS_CHOICES_MESSAGE)

        values = fields.model_dump(exclude={"status", "notes"})
        values.update(
            company_id=company_id,
            client_id=client_id,
            status=status,
            notes=fields.notes or "",
            completed_at=utcnow() if status == FollowupStatus.DONE else None,
        )
        return crud.followup.create(self.db, values=values)

    def create(
        self,
        fields: FollowupFields,
        *,
        company_id: Optional[int],
        client_id: Optional[int],
    ) -> Followup:
        followup = self.build(fields, company_id=company_id, client_id=client_id)
        self.db.commit()
        logger.info(
            f"Follow-up {followup.id} created for company={company_id} client={client_id} "
            f"status={followup.status}"
        )
        return followup

    def update_status(self, followup_id: int, new_status: Optional[str]) -> Followup:
        status = (new_status or "").strip().lower()
        if status not in FollowupStatus.ALL:
            raise InvalidInput("Invalid status")

        followup = crud.followup.get(self.db, followup_id)
        if followup is None:
            raise NotFound("Follow-up not found")

        previous = followup.status
        followup.status = status
        followup.completed_at = utcnow() if status == FollowupStatus.DONE else None
        self.db.commit()
        logger.info(f"Follow-up {followup_id} status {previous} -> {status}")
        return followup
