from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class Answers(BaseModel):
    """Questionnaire answers as submitted.

    Choice fields are plain strings: unknown values are stored as given and
    score 0. Numbers may arrive as strings from the form; anything that is
    not numeric is rejected.
    """

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    sleep: Optional[str] = None
    activity: Optional[str] = None
    stress: Optional[str] = None
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    hba1c_pct: Optional[float] = None

    @field_validator("sleep", "activity", "stress", mode="before")
    @classmethod
    def choice_as_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("height_cm", "weight_kg", "hba1c_pct", mode="before")
    @classmethod
    def blank_number_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PointsBreakdown(BaseModel):
    sleep: int
    activity: int
    stress: int
    bmi: int
    hba1c: int

    @property
    def total(self) -> int:
        return self.sleep + self.activity + self.stress + self.bmi + self.hba1c


class ScoreResult(BaseModel):
    bmi: Optional[float]
    bmi_bucket: Optional[str]
    hba1c_bucket: str
    points: PointsBreakdown
    total_score: int
    risk_category: str
    suggested_action: str
    remarks: str
