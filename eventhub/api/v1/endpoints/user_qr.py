from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from eventhub.api.deps import get_current_user
from eventhub.core.exceptions import QRServiceError
from eventhub.db.database import get_db
from eventhub.models.user import User
from eventhub.schemas.qr_code import QRCodeResponse
from eventhub.services.qr_issuance import QRCodeIssuanceService

router = APIRouter()

@router.post("/me/qr-code", response_model=QRCodeResponse)
def generate_my_qr_code(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Issue the caller's personal QR code (returns the existing one if already issued)"""
    try:
        issued = QRCodeIssuanceService(db).issue_for_user(current_user.id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(
        message="QR code generated successfully" if issued.created else "QR code already exists",
        qr_code=issued.qr_code,
        qr_code_data=issued.qr_code_data,
    )

@router.get("/me/qr-code", response_model=QRCodeResponse)
def get_my_qr_code(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        issued = QRCodeIssuanceService(db).get_user_code(current_user.id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return QRCodeResponse(message="QR code found", qr_code=issued.qr_code, qr_code_data=issued.qr_code_data)
