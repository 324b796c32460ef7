from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging
from eventhub import crud
from eventhub.api.deps import get_current_user, require_roles
from eventhub.core.exceptions import QRServiceError
from eventhub.db.database import get_db
from eventhub.models.base import utcnow
from eventhub.models.user import User, UserRole, STAFF_ROLES
from eventhub.schemas.event import EventRegistration, MarkEventAttendanceRequest
from eventhub.schemas.qr_code import QRCodeResponse
from eventhub.services.qr_issuance import QRCodeIssuanceService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/{event_id}/qr-code", response_model=QRCodeResponse)
def generate_event_qr_code(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES))
):
    """Issue the signed event code plus a quick-access link code for posters"""
    issuer = QRCodeIssuanceService(db)

    try:
        issued = issuer.issue_for_event(event_id)
        if not issued.created:
            return QRCodeResponse(
                message="QR code already exists",
                qr_code=issued.qr_code,
                qr_code_data=issued.qr_code_data,
            )

        link = issuer.issue_event_link(event_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(
        message="QR code generated successfully",
        qr_code=issued.qr_code,
        qr_code_data=issued.qr_code_data,
        url_qr_code=link.qr_code,
    )

@router.get("/{event_id}/qr-code", response_model=QRCodeResponse)
def get_event_qr_code(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        issued = QRCodeIssuanceService(db).get_event_code(event_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(message="QR code found", qr_code=issued.qr_code, qr_code_data=issued.qr_code_data)

@router.get("/{event_id}/qr-code/link", response_model=QRCodeResponse)
def get_event_link_qr_code(
    event_id: str,
    db: Session = Depends(get_db)
):
    """Unsigned code pointing at the public event page"""
    try:
        link = QRCodeIssuanceService(db).issue_event_link(event_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(message="Event link QR code", qr_code=link.qr_code, qr_code_data=link.qr_code_data)

@router.post("/{event_id}/register", response_model=EventRegistration)
def register_for_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not crud.event.get(db, event_id):
        raise HTTPException(status_code=404, detail="Event not found")

    try:
        registration = crud.event_registration.register(db, user_id=current_user.id, event_id=event_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    logger.info(f"User {current_user.id} registered for event {event_id}")
    return registration

@router.post("/attendance", response_model=EventRegistration)
def mark_event_attendance(
    request: MarkEventAttendanceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.MASTER))
):
    """Organiser checks a registered user in by hand"""
    try:
        registration = crud.event_registration.mark_attended(
            db,
            user_id=request.user_id,
            event_id=request.event_id,
            checked_in_by=current_user.id,
            checked_in_at=utcnow(),
        )
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    logger.info(f"User {request.user_id} marked attended at event {request.event_id} by {current_user.id}")
    return registration
