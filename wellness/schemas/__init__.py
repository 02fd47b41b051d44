from .auth import LoginRequest, RegisterRequest, UserPublic, AuthResponse, Principal
from .company import CompanyOut
from .client import (
    ClientOut,
    ClientUpdate,
    IntakeOut,
    IntakePatch,
    PlanFile,
    NewClientCreate,
    NewClientCreated,
    MIRRORED_INTAKE_FIELDS,
)
from .followup import FollowupFields, FollowupCreate, FollowupStatusUpdate, FollowupOut, CalendarEvent
from .questionnaire import SubmissionOut
from .alert import AlertCreate, AlertList, AlertOut, MarkReadResult
from .directory import DirectoryItem, DirectorySource, FormUserPatch, FormUserOut
from .summary import CompanyCard, SummaryTotals, SummaryResponse
