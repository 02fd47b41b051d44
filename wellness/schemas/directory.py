from typing import Optional, Union
from pydantic import BaseModel, ConfigDict

from .common import UTCDateTime


class DirectorySource:
    CLIENTS = "clients"
    INTAKE = "newclients"
    FORMDATA = "formdata"


class DirectoryItem(BaseModel):
    """Common projection of master clients, intake records and questionnaire users."""

    source: str
    # questionnaire-derived rows carry the user id here
    client_id: Union[int, str, None] = None
    company_id: Optional[int] = None
    name: Optional[str] = None
    contact: Optional[str] = None
    age: Optional[int] = None
    medical_history: Optional[str] = None
    current_condition: Optional[str] = None
    assigned_nutritionist: Optional[str] = None
    score: Optional[int] = None
    risk: Optional[str] = None
    last_submission: Optional[UTCDateTime] = None


class FormUserPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    company_id: Optional[int] = None


class FormUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    client_id: Optional[int] = None
    company_id: Optional[int] = None
    created_at: Optional[UTCDateTime] = None
