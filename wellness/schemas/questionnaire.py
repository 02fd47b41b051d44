from typing import Any, Dict
from pydantic import BaseModel, ConfigDict

from .common import UTCDateTime


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    answers: Dict[str, Any]
    computed: Dict[str, Any]
    created_at: UTCDateTime
