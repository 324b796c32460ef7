# File: eventhub/schemas/qr_code.py
from pydantic import BaseModel, Field
from typing import Literal, Optional

class QRCodeResponse(BaseModel):
    message: str
    qr_code: str  # Base64 encoded PNG
    qr_code_data: str
    url_qr_code: Optional[str] = None  # Quick-access link code, event issuance only

class GenerateQRCodeRequest(BaseModel):
    type: Literal["user", "event", "teamMember"] = "teamMember"
    user_id: Optional[str] = Field(None, alias="userId")
    event_id: Optional[str] = Field(None, alias="eventId")
    student_id: Optional[str] = Field(None, alias="studentId")
    team_id: Optional[str] = Field(None, alias="teamId")
    hackathon_id: Optional[str] = Field(None, alias="hackathonId")
    save_to_database: bool = Field(False, alias="saveToDatabase")

    class Config:
        populate_by_name = True

class GenerateQRCodeResponse(BaseModel):
    success: bool = True
    qr_code: str
    qr_code_data: str
    saved_to_database: bool = False

class TeamMemberQRRequest(BaseModel):
    team_id: str = Field(..., alias="teamId")
    hackathon_id: str = Field(..., alias="hackathonId")

    class Config:
        populate_by_name = True
