# File: eventhub/schemas/hackathon.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime

class HackathonCreate(BaseModel):
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    location: Optional[str] = None
    mode: Optional[str] = "OFFLINE"
    poster_url: Optional[str] = None
    organizer_name: Optional[str] = None

class HackathonTeamCreate(BaseModel):
    hackathon_id: str
    team_name: str
    disqualified: bool = False

class HackathonTeamMemberCreate(BaseModel):
    team_id: str
    student_id: str
    is_leader: bool = False

class AttendanceScheduleCreate(BaseModel):
    hackathon_id: str
    day: int = Field(..., ge=1)
    check_in_time: datetime
    description: Optional[str] = None

class AttendanceSchedule(BaseModel):
    id: str
    hackathon_id: str
    day: int
    check_in_time: datetime
    description: Optional[str] = None

    class Config:
        from_attributes = True

class AttendanceRecord(BaseModel):
    id: str
    attendance_schedule_id: str
    team_member_id: str
    is_present: bool
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None

    class Config:
        from_attributes = True

class MarkAttendanceRequest(BaseModel):
    schedule_id: str
    team_id: str
    student_id: str

class BulkAttendanceRequest(BaseModel):
    schedule_id: str
    team_id: str
    is_present: bool = True

class BulkAttendanceResult(BaseModel):
    team_id: str
    team_name: str
    member_count: int
    records: List[AttendanceRecord]

class TeamMemberScanRequest(BaseModel):
    qr_code_data: str = Field(..., alias="qrCodeData", min_length=1)
    schedule_id: str = Field(..., alias="scheduleId")

    class Config:
        populate_by_name = True

class ScheduleMemberAttendance(BaseModel):
    team_id: str
    team_name: str
    team_member_id: str
    student_id: str
    name: str
    registration_number: str
    is_present: bool = False  # No record yet counts as absent
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None

class ScheduleAttendanceStats(BaseModel):
    total_members: int
    present_count: int
    absent_count: int
    attendance_percentage: int
    total_teams: int
    present_teams: int
    absent_teams: int

class ScheduleAttendanceDetails(BaseModel):
    schedule: AttendanceSchedule
    stats: ScheduleAttendanceStats
    members: List[ScheduleMemberAttendance]
