# File: eventhub/api/v1/api.py
from fastapi import APIRouter
from eventhub.api.v1.endpoints import qr_codes, user_qr, events, hackathon_qr, hackathon_attendance

# Create main API router
api_router = APIRouter()

api_router.include_router(
    qr_codes.router,
    prefix="/qr-code",
    tags=["qr-codes"]
)

api_router.include_router(
    user_qr.router,
    prefix="/users",
    tags=["qr-codes"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    hackathon_qr.router,
    prefix="/hackathons",
    tags=["hackathons"]
)

api_router.include_router(
    hackathon_attendance.router,
    prefix="/hackathons",
    tags=["hackathon-attendance"]
)

api_router.include_router(
    hackathon_qr.team_member_router,
    prefix="/students",
    tags=["qr-codes"]
)
