"""Questionnaire risk scoring.

This package contains:
- Fixed point tables and advisory texts (``mappings``)
- A small, pure engine turning answers into a score (``engine``)
- Pydantic schemas for the answers and the computed result

Nothing here touches the database; callers persist the result.
"""

from .engine import calc_bmi, bucket_bmi, bucket_hba1c, risk_from_total, build_remarks, score
from .schemas import Answers, ScoreResult, PointsBreakdown

__all__ = [
    "calc_bmi",
    "bucket_bmi",
    "bucket_hba1c",
    "risk_from_total",
    "build_remarks",
    "score",
    "Answers",
    "ScoreResult",
    "PointsBreakdown",
]
