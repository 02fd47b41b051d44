from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from .common import FlexibleDateTime, UTCDateTime


class FollowupFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    scheduled_at: FlexibleDateTime = None
    followup_date: FlexibleDateTime = None
    status: Optional[str] = None
    notes: Optional[str] = None
    assigned_nutritionist: Optional[str] = None
    requirements: Optional[str] = None
    present_readings: Optional[str] = None
    next_target: Optional[str] = None
    given_plan: Optional[str] = None
    weight_kg: Optional[float] = None
    bmi: Optional[float] = None
    bp: Optional[str] = None
    sugar: Optional[str] = None


class FollowupCreate(FollowupFields):
    """Body of ``POST /followups``; the nested route takes the ids from the path."""

    company_id: Optional[int] = None
    client_id: Optional[int] = None


class FollowupStatusUpdate(BaseModel):
    status: Optional[str] = None


class FollowupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    client_id: int
    scheduled_at: Optional[UTCDateTime] = None
    followup_date: Optional[UTCDateTime] = None
    effective_scheduled_at: Optional[UTCDateTime] = None
    status: str
    completed_at: Optional[UTCDateTime] = None
    notes: Optional[str] = ""
    assigned_nutritionist: Optional[str] = None
    requirements: Optional[str] = None
    present_readings: Optional[str] = None
    next_target: Optional[str] = None
    given_plan: Optional[str] = None
    weight_kg: Optional[float] = None
    bmi: Optional[float] = None
    bp: Optional[str] = None
    sugar: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None
    overdue: bool = False

    @classmethod
    def from_model(cls, followup, now: datetime, after_hours: int) -> "FollowupOut":
        out = cls.model_validate(followup)
        out.overdue = followup.is_overdue(now, after_hours)
        return out


class CalendarEvent(BaseModel):
    id: int
    date: str
    scheduled_at: Optional[UTCDateTime] = None
    status: str
    overdue: bool
    client_id: int
    client_name: str
    company_id: int
    company_name: str
    assigned_nutritionist: Optional[str] = None
