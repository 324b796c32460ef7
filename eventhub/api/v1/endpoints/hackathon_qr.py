from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from eventhub import crud
from eventhub.api.deps import get_current_user, require_roles
from eventhub.core.exceptions import QRServiceError
from eventhub.db.database import get_db
from eventhub.models.user import User, STAFF_ROLES
from eventhub.schemas.qr_code import QRCodeResponse, TeamMemberQRRequest
from eventhub.services.qr_issuance import QRCodeIssuanceService

router = APIRouter()

@router.post("/{hackathon_id}/qr-code", response_model=QRCodeResponse)
def generate_hackathon_qr_code(
    hackathon_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES))
):
    """Quick-access code linking to the hackathon page"""
    try:
        issued = QRCodeIssuanceService(db).issue_hackathon_link(hackathon_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(
        message="QR code generated successfully" if issued.created else "QR code already exists",
        qr_code=issued.qr_code,
        qr_code_data=issued.qr_code_data,
    )

@router.get("/{hackathon_id}/qr-code", response_model=QRCodeResponse)
def get_hackathon_qr_code(
    hackathon_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        issued = QRCodeIssuanceService(db).get_hackathon_code(hackathon_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(message="QR code found", qr_code=issued.qr_code, qr_code_data=issued.qr_code_data)


# Team member codes (mounted under /students)
team_member_router = APIRouter()

def _current_student(db: Session, user: User):
    student = crud.student.get_by_user(db, user_id=user.id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student

@team_member_router.post("/team-member/qr-code", response_model=QRCodeResponse)
def generate_team_member_qr_code(
    request: TeamMemberQRRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Issue the caller's code for one of their hackathon teams"""
    student = _current_student(db, current_user)

    if not crud.team_member.get_by_team_student(db, team_id=request.team_id, student_id=student.id):
        raise HTTPException(status_code=403, detail="You are not a member of this team")

    try:
        issued = QRCodeIssuanceService(db).issue_for_team_member(
            student.id, request.team_id, request.hackathon_id, persist=True
        )
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(
        message="QR code generated successfully" if issued.created else "QR code already exists",
        qr_code=issued.qr_code,
        qr_code_data=issued.qr_code_data,
    )

@team_member_router.get("/team-member/qr-code", response_model=QRCodeResponse)
def get_team_member_qr_code(
    team_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    student = _current_student(db, current_user)

    if not crud.team_member.get_by_team_student(db, team_id=team_id, student_id=student.id):
        raise HTTPException(status_code=403, detail="You are not a member of this team")

    try:
        issued = QRCodeIssuanceService(db).get_team_member_code(student.id, team_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(message="QR code found", qr_code=issued.qr_code, qr_code_data=issued.qr_code_data)
