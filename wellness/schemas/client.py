from typing import Optional
from pydantic import BaseModel, ConfigDict

from .common import FlexibleDateTime, LenientInt, UTCDateTime


class ClientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_id: int
    client_id: int
    emp_id: Optional[int] = None
    name: str
    age: Optional[int] = None
    contact_info: Optional[str] = None
    medical_history: Optional[str] = None
    current_condition: Optional[str] = None
    assigned_nutritionist: Optional[str] = None
    requirements: Optional[str] = None
    present_readings: Optional[str] = None
    next_target: Optional[str] = None
    given_plan: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None


class ClientUpdate(BaseModel):
    """Admin edit of a master record. Only fields present in the body are written."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    contact_info: Optional[str] = None
    age: LenientInt = None
    medical_history: Optional[str] = None
    current_condition: Optional[str] = None
    assigned_nutritionist: Optional[str] = None
    requirements: Optional[str] = None
    present_readings: Optional[str] = None
    next_target: Optional[str] = None
    given_plan: Optional[str] = None
    notes: Optional[str] = None


class PlanFile(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None
    base64: Optional[str] = None


class PlanFileOut(PlanFile):
    uploaded_at: Optional[UTCDateTime] = None


class IntakeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_id: int
    company_name: Optional[str] = None
    client_id: int
    emp_id: Optional[int] = None
    name: Optional[str] = None
    contact_info: Optional[str] = None
    age: Optional[int] = None
    medical_history: Optional[str] = None
    current_condition: Optional[str] = None
    assigned_nutritionist: Optional[str] = None
    first_followup_at: Optional[UTCDateTime] = None
    status: Optional[str] = None
    requirements: Optional[str] = None
    present_readings: Optional[str] = None
    next_target: Optional[str] = None
    given_plan: Optional[str] = None
    notes: Optional[str] = None
    given_plan_file: Optional[PlanFileOut] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None


class IntakePatch(BaseModel):
    """Profile edit form. Contact and clinical basics are mirrored to the master record."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    contact_info: Optional[str] = None
    age: LenientInt = None
    medical_history: Optional[str] = None
    current_condition: Optional[str] = None
    assigned_nutritionist: Optional[str] = None
    first_followup_at: FlexibleDateTime = None
    status: Optional[str] = None
    requirements: Optional[str] = None
    present_readings: Optional[str] = None
    next_target: Optional[str] = None
    given_plan: Optional[str] = None
    notes: Optional[str] = None


# Fields copied from an intake edit onto the master record
MIRRORED_INTAKE_FIELDS = (
    "name",
    "contact_info",
    "age",
    "medical_history",
    "current_condition",
    "assigned_nutritionist",
)


class NewClientCreate(BaseModel):
    """Onboarding form for a new client."""

    model_config = ConfigDict(extra="ignore")

    company_id: LenientInt = None
    company_name: Optional[str] = None
    client_id: LenientInt = None
    emp_id: LenientInt = None
    name: Optional[str] = None
    contact_info: Optional[str] = None
    age: LenientInt = None
    medical_history: Optional[str] = None
    current_condition: Optional[str] = None
    assigned_nutritionist: Optional[str] = None
    first_followup_at: FlexibleDateTime = None
    status: Optional[str] = None
    requirements: Optional[str] = None
    present_readings: Optional[str] = None
    next_target: Optional[str] = None
    given_plan: Optional[str] = None
    notes: Optional[str] = None
    given_plan_file: Optional[PlanFile] = None


class NewClientCreated(BaseModel):
    ok: bool = True
    company_id: int
    client_id: int
