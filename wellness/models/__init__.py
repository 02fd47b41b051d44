from .company import Company
from .client import Client, IntakeRecord
from .followup import Followup, FollowupStatus
from .questionnaire import QuestionnaireSubmission
from .user import User, Role
from .alert import Alert

__all__ = [
    "Company", "Client", "IntakeRecord", "Followup", "FollowupStatus",
    "QuestionnaireSubmission", "User", "Role", "Alert",
]
