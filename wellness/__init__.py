"""Corporate wellness program backend.

Companies, enrolled clients, scheduled follow-ups, self-service risk
questionnaires and a staff alerts feed, served over HTTP to the dashboard.
"""

__version__ = "0.1.0"
