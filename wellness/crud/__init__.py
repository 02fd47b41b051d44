from .company import company
from .client import client, intake
from .followup import followup
from .questionnaire import questionnaire
from .user import user
from .alert import alert

__all__ = ["company", "client", "intake", "followup", "questionnaire", "user", "alert"]
