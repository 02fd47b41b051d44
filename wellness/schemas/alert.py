from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from .common import UTCDateTime


class AlertCreate(BaseModel):
    for_user: str
    title: Optional[str] = None
    message: Optional[str] = None
    company_id: Optional[int] = None
    client_id: Optional[int] = None

    @field_validator("for_user")
    @classmethod
    def for_user_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("for_user is required")
        return v


class AlertOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    for_user: str
    title: Optional[str] = None
    message: Optional[str] = None
    company_id: Optional[int] = None
    client_id: Optional[int] = None
    created_at: UTCDateTime
    read_at: Optional[UTCDateTime] = None


class AlertList(BaseModel):
    alerts: List[AlertOut]


class MarkReadResult(BaseModel):
    ok: bool = True
    updated: int
