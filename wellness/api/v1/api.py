from fastapi import APIRouter

from wellness.api.v1.endpoints import auth
from wellness.api.v1.endpoints import companies
from wellness.api.v1.endpoints import followups
from wellness.api.v1.endpoints import calendar
from wellness.api.v1.endpoints import summary
from wellness.api.v1.endpoints import newclients
from wellness.api.v1.endpoints import directory
from wellness.api.v1.endpoints import formdata
from wellness.api.v1.endpoints import alerts
from wellness.api.v1.endpoints import client_home

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(followups.router, prefix="/followups", tags=["followups"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(summary.router, prefix="/summary", tags=["summary"])
api_router.include_router(newclients.router, prefix="/newclients", tags=["newclients"])
api_router.include_router(directory.router, prefix="/directory", tags=["directory"])
api_router.include_router(formdata.router, prefix="/formdata", tags=["formdata"])
api_router.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
api_router.include_router(client_home.router, prefix="/client", tags=["client"])
