from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging
from eventhub.api.deps import get_current_user, require_roles
from eventhub.core.exceptions import QRServiceError
from eventhub.db.database import get_db
from eventhub.models.user import User, STAFF_ROLES
from eventhub.schemas.qr_code import GenerateQRCodeRequest, GenerateQRCodeResponse
from eventhub.schemas.scan import EventScanResult, ScanRequest, UserScanResult
from eventhub.services.qr_issuance import QRCodeIssuanceService
from eventhub.services.qr_scan import QRScanService, ScanContext
from typing import Union

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/generate", response_model=GenerateQRCodeResponse)
def generate_qr_code(
    request: GenerateQRCodeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES))
):
    """Staff tool: render a signed code of any type, optionally storing team-member codes"""
    issuer = QRCodeIssuanceService(db)

    try:
        if request.type == "user":
            if not request.user_id:
                raise HTTPException(status_code=400, detail="userId is required for user type")
            issued = issuer.issue_for_user(request.user_id)
            return GenerateQRCodeResponse(qr_code=issued.qr_code, qr_code_data=issued.qr_code_data, saved_to_database=True)

        if request.type == "event":
            if not request.event_id:
                raise HTTPException(status_code=400, detail="eventId is required for event type")
            issued = issuer.issue_for_event(request.event_id)
            return GenerateQRCodeResponse(qr_code=issued.qr_code, qr_code_data=issued.qr_code_data, saved_to_database=True)

        if not request.student_id or not request.hackathon_id:
            raise HTTPException(
                status_code=400,
                detail="studentId and hackathonId are required for teamMember type"
            )

        persist = bool(request.team_id and request.save_to_database)
        issued = issuer.issue_for_team_member(
            request.student_id,
            request.team_id or "",
            request.hackathon_id,
            persist=persist,
        )
        return GenerateQRCodeResponse(qr_code=issued.qr_code, qr_code_data=issued.qr_code_data, saved_to_database=persist)

    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/scan", response_model=Union[UserScanResult, EventScanResult])
def scan_qr_code(
    request: ScanRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Staff scans a personal or event QR code; with eventId a personal code checks the user in"""
    context = ScanContext(
        actor_id=current_user.id,
        actor_role=current_user.role,
        event_id=request.event_id,
    )

    try:
        return QRScanService(db).scan(request.qr_code_data, context)
    except QRServiceError as e:
        logger.warning(f"QR scan by {current_user.id} rejected: {e.status_code}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
