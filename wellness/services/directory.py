"""
Client directory: one list built from master clients, intake records and
questionnaire users (latest submission each).

For nutritionists, assignment is read from follow-ups. A name matches when it
equals the nutritionist's own name ignoring case, extra whitespace and a
leading honorific (Dr, Mr, Mrs, Ms).
"""

import logging
import re
from typing import List, Optional, Pattern, Set, Tuple

from sqlalchemy.orm import Session

from wellness import crud
from wellness.core.errors import Conflict, InvalidInput, NotFound
from wellness.models.user import Role
from wellness.schemas.auth import Principal
from wellness.schemas.company import CompanyOut
from wellness.schemas.directory import DirectoryItem, DirectorySource, FormUserOut, FormUserPatch
from wellness.schemas.questionnaire import SubmissionOut

logger = logging.getLogger(__name__)

_HONORIFIC = re.compile(r"^(ms|mrs|mr|dr)\.?\s+", re.IGNORECASE)


def normalize_name_core(name: Optional[str]) -> str:
    text = _HONORIFIC.sub("", (name or "").strip().lower())
    return re.sub(r"\s+", " ", text).strip()


def nutritionist_pattern(name: Optional[str]) -> Optional[Pattern]:
    """Regex matching every spelling of a nutritionist's name, None for a blank name."""
    core = normalize_name_core(name)
    if not core:
        return None
    body = r"\s+".join(re.escape(part) for part in core.split(" "))
    return re.compile(rf"^\s*(?:ms\.?|mrs\.?|mr\.?|dr\.?)?\s*{body}\s*$", re.IGNORECASE)


def _matches(pattern: Pattern, value: Optional[str]) -> bool:
    return bool(value) and pattern.match(value) is not None


class DirectoryService:
    def __init__(self, db: Session):
        self.db = db

    def _assignment(self, pattern: Pattern) -> Tuple[Set[Tuple[int, int]], Set[int]]:
        pairs = {
            (f.company_id, f.client_id)
            for f in crud.followup.list_filtered(self.db)
            if _matches(pattern, f.assigned_nutritionist)
        }
        return pairs, {company_id for company_id, _ in pairs}

    def list_items(self, principal: Principal) -> List[DirectoryItem]:
        is_nutritionist = principal.role == Role.NUTRITIONIST
        pattern = nutritionist_pattern(principal.name) if is_nutritionist else None
        pairs: Set[Tuple[int, int]] = set()
        company_ids: Set[int] = set()
        if pattern is not None:
            pairs, company_ids = self._assignment(pattern)

        def visible(company_id: int, client_id: int, assigned: Optional[str]) -> bool:
            if not is_nutritionist:
                return True
            if pattern is None:
                return False
            return _matches(pattern, assigned) or (company_id, client_id) in pairs

        items: List[DirectoryItem] = []

        for client in crud.client.list_all(self.db):
            if not visible(client.company_id, client.client_id, client.assigned_nutritionist):
                continue
            if is_nutritionist:
                company_ids.add(client.company_id)
            items.append(
                DirectoryItem(
                    source=DirectorySource.CLIENTS,
                    client_id=client.client_id,
                    company_id=client.company_id,
                    name=client.name,
                    contact=client.contact_info,
                    age=client.age,
                    medical_history=client.medical_history,
                    current_condition=client.current_condition,
                    assigned_nutritionist=client.assigned_nutritionist,
                )
            )

        for record in crud.intake.list_all(self.db):
            if not visible(record.company_id, record.client_id, record.assigned_nutritionist):
                continue
            items.append(
                DirectoryItem(
                    source=DirectorySource.INTAKE,
                    client_id=record.client_id,
                    company_id=record.company_id,
                    name=record.name,
                    contact=record.contact_info,
                    age=record.age,
                    medical_history=record.medical_history,
                    current_condition=record.current_condition,
                    assigned_nutritionist=record.assigned_nutritionist,
                    risk=record.status,
                )
            )

        if is_nutritionist and not company_ids:
            return items

        items.extend(self._questionnaire_items(company_ids if is_nutritionist else None))
        return items

    def _questionnaire_items(self, company_ids: Optional[Set[int]]) -> List[DirectoryItem]:
        submissions = crud.questionnaire.latest_per_user(self.db)
        users = {u.id: u for u in crud.user.get_many(self.db, (s.user_id for s in submissions))}
        items = []
        for submission in submissions:
            user = users.get(submission.user_id)
            if user is None:
                continue
            if company_ids is not None and user.company_id not in company_ids:
                continue
            computed = submission.computed or {}
            items.append(
                DirectoryItem(
                    source=DirectorySource.FORMDATA,
                    client_id=user.id,
                    company_id=user.company_id,
                    name=user.name,
                    contact=user.email,
                    score=computed.get("total_score"),
                    risk=computed.get("risk_category"),
                    last_submission=submission.created_at,
                )
            )
        return items

    # ------------------------------------------------------- questionnaire users

    def _get_user(self, user_id: int):
        user = crud.user.get(self.db, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def form_profile(self, user_id: int) -> dict:
        user = self._get_user(user_id)
        latest = crud.questionnaire.latest_for_user(self.db, user_id=user.id)
        company = crud.company.get(self.db, user.company_id) if user.company_id is not None else None
        return {
            "ok": True,
            "user": FormUserOut.model_validate(user),
            "company": CompanyOut.model_validate(company) if company else None,
            "form": SubmissionOut.model_validate(latest) if latest else None,
        }

    def update_form_user(self, user_id: int, patch: FormUserPatch) -> dict:
        user = self._get_user(user_id)
        update_data = patch.model_dump(exclude_unset=True)
        if not update_data:
            raise InvalidInput("No updatable fields provided")

        if "email" in update_data:
            email = (update_data["email"] or "").strip().lower()
            if not email:
                raise InvalidInput("email must not be empty")
            existing = crud.user.get_by_email(self.db, email=email)
            if existing is not None and existing.id != user.id:
                raise Conflict("Email already registered")
            update_data["email"] = email
        if "name" in update_data and not (update_data["name"] or "").strip():
            raise InvalidInput("name must not be empty")

        crud.user.update(self.db, db_obj=user, update_data=update_data)
        self.db.commit()
        logger.info(f"Updated questionnaire user {user_id}: {sorted(update_data)}")
        return {"ok": True, "user": FormUserOut.model_validate(user)}

    def delete_form_user(self, user_id: int) -> dict:
        user = self._get_user(user_id)
        removed = crud.questionnaire.remove_for_user(self.db, user_id=user.id)
        crud.user.remove(self.db, db_obj=user)
        self.db.commit()
        logger.info(f"Deleted questionnaire user {user_id} with {removed} submissions")
        return {"ok": True, "deleted_user_id": user_id}
