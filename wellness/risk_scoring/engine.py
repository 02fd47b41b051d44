import math
from typing import Optional, Tuple

from wellness.utils.numbers import round_half_up
from . import mappings
from .schemas import Answers, PointsBreakdown, ScoreResult


def calc_bmi(height_cm: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
    """BMI rounded to one decimal, or None when it cannot be computed.

    Zero counts as missing for both inputs.
    """
    if not height_cm or not weight_kg:
        return None
    h = height_cm / 100
    if h <= 0:
        return None
    bmi = weight_kg / (h * h)
    if not math.isfinite(bmi):
        return None
    return round_half_up(bmi, 1)


def bucket_bmi(bmi: Optional[float]) -> Optional[str]:
    if bmi is None:
        return None
    if bmi < 18.5:
        return "under"
    if bmi < 25:
        return "normal"
    if bmi < 30:
        return "over"
    return "obese"


def bucket_hba1c(a1c: Optional[float]) -> str:
    if a1c is None or a1c < 5.7:
        return "normal"
    if a1c < 6.5:
        return "pre"
    return "diabetes"


def risk_from_total(total: int) -> Tuple[str, str]:
    """Map a total score onto (category, suggested action)."""
    for upper, category, action in mappings.RISK_BANDS:
        if total <= upper:
            return category, action
    return mappings.HIGH_RISK, mappings.HIGH_RISK_ACTION


def build_remarks(points: PointsBreakdown, bmi_bucket: Optional[str]) -> str:
    notes = []
    if points.sleep >= 2:
        notes.append(mappings.REMARK_SLEEP)
    if points.activity >= 2:
        notes.append(mappings.REMARK_ACTIVITY)
    if points.stress >= 2:
        notes.append(mappings.REMARK_STRESS)
    if bmi_bucket in mappings.REMARK_BMI:
        notes.append(mappings.REMARK_BMI[bmi_bucket])
    if points.hba1c >= 2:
        notes.append(mappings.REMARK_HBA1C)
    return " ".join(notes) if notes else mappings.REMARK_HEALTHY


def _lookup(table: dict, value: Optional[str], default: str) -> int:
    key = default if value is None else value
    return table.get(key, 0)


def score(answers: Answers) -> ScoreResult:
    """Score one questionnaire. Pure and total: never raises on odd answers."""
    bmi = calc_bmi(answers.height_cm, answers.weight_kg)
    bmi_bucket = bucket_bmi(bmi)
    a1c_bucket = bucket_hba1c(answers.hba1c_pct)

    points = PointsBreakdown(
        sleep=_lookup(mappings.SLEEP_POINTS, answers.sleep, mappings.DEFAULT_SLEEP),
        activity=_lookup(mappings.ACTIVITY_POINTS, answers.activity, mappings.DEFAULT_ACTIVITY),
        stress=_lookup(mappings.STRESS_POINTS, answers.stress, mappings.DEFAULT_STRESS),
        bmi=mappings.BMI_POINTS[bmi_bucket] if bmi_bucket is not None else 0,
        hba1c=mappings.HBA1C_POINTS[a1c_bucket],
    )
    total = points.total
    category, action = risk_from_total(total)

    return ScoreResult(
        bmi=bmi,
        bmi_bucket=bmi_bucket,
        hba1c_bucket=a1c_bucket,
        points=points,
        total_score=total,
        risk_category=category,
        suggested_action=action,
        remarks=build_remarks(points, bmi_bucket),
    )
