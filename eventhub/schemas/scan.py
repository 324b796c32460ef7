# File: eventhub/schemas/scan.py
from pydantic import BaseModel, Field
from typing import Literal, Optional, Union
from datetime import date, datetime
from eventhub.schemas.event import EventInfo
from eventhub.schemas.hackathon import AttendanceRecord
from eventhub.schemas.user import ScannedUser

class ScanRequest(BaseModel):
    qr_code_data: str = Field(..., alias="qrCodeData", min_length=1)
    event_id: Optional[str] = Field(None, alias="eventId")

    class Config:
        populate_by_name = True

class RegistrationEvent(BaseModel):
    name: str
    start_date: date

class RegistrationCheckIn(BaseModel):
    id: str
    attended: bool
    checked_in_at: Optional[datetime] = None
    checked_in_now: bool  # True only for the scan that flipped attendance
    event: RegistrationEvent

class UserScanResult(BaseModel):
    success: bool = True
    type: Literal["user"] = "user"
    user: ScannedUser
    registration: Optional[RegistrationCheckIn] = None
    scanned_at: datetime

class EventScanResult(BaseModel):
    success: bool = True
    type: Literal["event"] = "event"
    event: EventInfo
    scanned_at: datetime
    message: str = "Event QR code scanned successfully. This code can be used to check in registered users."
    instructions: str = "Ask attendees to present their personal QR codes to check in."

ScanResult = Union[UserScanResult, EventScanResult]

class ScannedTeamMember(BaseModel):
    name: str
    registration_number: str
    team_id: str
    team_name: str

class TeamMemberScanResult(BaseModel):
    success: bool = True
    type: Literal["teamMember"] = "teamMember"
    member: ScannedTeamMember
    attendance: AttendanceRecord
    checked_in_now: bool
    scanned_at: datetime
