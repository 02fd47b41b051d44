"""Point tables and fixed texts for the wellness questionnaire.

These are part of the program rubric and are not configurable at runtime.
"""

SLEEP_POINTS = {"<4": 3, "4-5": 2, "6-7": 1, "8+": 0}
ACTIVITY_POINTS = {"0": 3, "1-2": 2, "3-4": 1, "5+": 0}
STRESS_POINTS = {"Always/Often": 3, "Sometimes": 2, "Rarely/Never": 0}
BMI_POINTS = {"under": 1, "normal": 0, "over": 1, "obese": 3}
HBA1C_POINTS = {"normal": 0, "pre": 2, "diabetes": 3}

# Answer used when the field is left out of the submission entirely
DEFAULT_SLEEP = "6-7"
DEFAULT_ACTIVITY = "3-4"
DEFAULT_STRESS = "Sometimes"

LOW_RISK = "Low Risk"
MODERATE_RISK = "Moderate Risk"
HIGH_RISK = "High Risk"

# (inclusive upper bound on total score, category, suggested action)
RISK_BANDS = (
    (5, LOW_RISK, "Maintain healthy lifestyle."),
    (10, MODERATE_RISK, "Consider lifestyle improvements; consult if needed."),
)
HIGH_RISK_ACTION = "Strongly recommend medical consultation and intervention."

REMARK_SLEEP = "Sleep pattern suboptimal."
REMARK_ACTIVITY = "Low physical activity."
REMARK_STRESS = "High perceived stress."
REMARK_BMI = {
    "under": "BMI underweight.",
    "over": "BMI overweight.",
    "obese": "BMI obese.",
}
REMARK_HBA1C = "HbA1c elevated."
REMARK_HEALTHY = "Within healthy ranges on all tracked items."
