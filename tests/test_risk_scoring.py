import pytest

from wellness.risk_scoring import (
    Answers,
    bucket_bmi,
    bucket_hba1c,
    calc_bmi,
    risk_from_total,
    score,
)
from wellness.risk_scoring import mappings


def test_calc_bmi_rounds_to_one_decimal():
    assert calc_bmi(170, 70) == 24.2
    assert bucket_bmi(calc_bmi(170, 70)) == "normal"


@pytest.mark.parametrize(
    "height, weight",
    [(0, 70), (170, None), (None, 70), (170, 0), (-170, 70)],
)
def test_calc_bmi_missing_or_invalid_inputs(height, weight):
    assert calc_bmi(height, weight) is None


def test_bmi_buckets():
    assert bucket_bmi(None) is None
    assert bucket_bmi(18.4) == "under"
    assert bucket_bmi(18.5) == "normal"
    assert bucket_bmi(24.9) == "normal"
    assert bucket_bmi(25) == "over"
    assert bucket_bmi(29.9) == "over"
    assert bucket_bmi(30) == "obese"


def test_hba1c_buckets_default_to_normal():
    assert bucket_hba1c(None) == "normal"
    assert bucket_hba1c(5.6) == "normal"
    assert bucket_hba1c(5.7) == "pre"
    assert bucket_hba1c(6.4) == "pre"
    assert bucket_hba1c(6.5) == "diabetes"


@pytest.mark.parametrize(
    "total, category",
    [(0, "Low Risk"), (5, "Low Risk"), (6, "Moderate Risk"), (10, "Moderate Risk"), (11, "High Risk"), (15, "High Risk")],
)
def test_risk_category_boundaries(total, category):
    assert risk_from_total(total)[0] == category


def test_each_category_carries_its_action():
    assert risk_from_total(0)[1] == "Maintain healthy lifestyle."
    assert risk_from_total(8)[1] == "Consider lifestyle improvements; consult if needed."
    assert risk_from_total(12)[1] == mappings.HIGH_RISK_ACTION


def test_healthy_answers():
    result = score(Answers(sleep="8+", activity="5+", stress="Rarely/Never", height_cm=170, weight_kg=70, hba1c_pct=5.0))

    assert result.bmi == 24.2
    assert result.bmi_bucket == "normal"
    assert result.hba1c_bucket == "normal"
    assert result.total_score == 0
    assert result.risk_category == "Low Risk"
    assert result.remarks == "Within healthy ranges on all tracked items."


def test_worst_answers_trigger_every_remark_in_order():
    result = score(Answers(sleep="<4", activity="0", stress="Always/Often", height_cm=170, weight_kg=95, hba1c_pct=7.0))

    assert result.points.model_dump() == {"sleep": 3, "activity": 3, "stress": 3, "bmi": 3, "hba1c": 3}
    assert result.total_score == 15
    assert result.risk_category == "High Risk"
    assert result.remarks == (
        "Sleep pattern suboptimal. Low physical activity. High perceived stress. BMI obese. HbA1c elevated."
    )


@pytest.mark.parametrize("sleep", list(mappings.SLEEP_POINTS))
@pytest.mark.parametrize("activity", list(mappings.ACTIVITY_POINTS))
@pytest.mark.parametrize("stress", list(mappings.STRESS_POINTS))
def test_total_is_sum_of_points(sleep, activity, stress):
    result = score(Answers(sleep=sleep, activity=activity, stress=stress, height_cm=160, weight_kg=80, hba1c_pct=6.0))

    expected = (
        mappings.SLEEP_POINTS[sleep]
        + mappings.ACTIVITY_POINTS[activity]
        + mappings.STRESS_POINTS[stress]
        + mappings.BMI_POINTS["obese"]
        + mappings.HBA1C_POINTS["pre"]
    )
    assert result.total_score == expected == result.points.total
    assert result.risk_category == risk_from_total(expected)[0]


def test_unknown_choices_score_zero():
    result = score(Answers(sleep="lots", activity="sometimes", stress="n/a"))

    assert result.points.sleep == 0
    assert result.points.activity == 0
    assert result.points.stress == 0


def test_missing_choices_use_questionnaire_defaults():
    result = score(Answers())

    assert result.points.sleep == mappings.SLEEP_POINTS[mappings.DEFAULT_SLEEP]
    assert result.points.activity == mappings.ACTIVITY_POINTS[mappings.DEFAULT_ACTIVITY]
    assert result.points.stress == mappings.STRESS_POINTS[mappings.DEFAULT_STRESS]
    assert result.bmi is None
    assert result.bmi_bucket is None
    assert result.points.bmi == 0
    assert result.total_score == 4


def test_underweight_and_overweight_remarks():
    under = score(Answers(sleep="8+", activity="5+", stress="Rarely/Never", height_cm=180, weight_kg=50))
    over = score(Answers(sleep="8+", activity="5+", stress="Rarely/Never", height_cm=170, weight_kg=80))

    assert under.remarks == "BMI underweight."
    assert under.points.bmi == 1
    assert over.remarks == "BMI overweight."
    assert over.points.bmi == 1


def test_form_values_are_coerced():
    answers = Answers(activity=0, height_cm="170", weight_kg="70", hba1c_pct="")

    assert answers.activity == "0"
    assert answers.hba1c_pct is None
    assert score(answers).bmi == 24.2


def test_non_numeric_measurements_are_rejected():
    with pytest.raises(ValueError):
        Answers(height_cm="tall")
