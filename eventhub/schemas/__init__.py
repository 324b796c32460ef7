# File: eventhub/schemas/__init__.py
from .user import UserCreate, StudentCreate, StudentProfile, ScannedUser
from .event import (
    EventBase, EventCreate, EventInfo, EventRegistrationCreate, EventRegistration, MarkEventAttendanceRequest
)
from .hackathon import (
    HackathonCreate, HackathonTeamCreate, HackathonTeamMemberCreate,
    AttendanceScheduleCreate, AttendanceSchedule, AttendanceRecord,
    MarkAttendanceRequest, BulkAttendanceRequest, BulkAttendanceResult, TeamMemberScanRequest,
    ScheduleMemberAttendance, ScheduleAttendanceStats, ScheduleAttendanceDetails
)
from .qr_payload import UserPayload, EventPayload, TeamMemberPayload, QRPayload, IssuedQRCode
from .qr_code import QRCodeResponse, GenerateQRCodeRequest, GenerateQRCodeResponse, TeamMemberQRRequest
from .scan import (
    ScanRequest, RegistrationEvent, RegistrationCheckIn, UserScanResult,
    EventScanResult, ScanResult, ScannedTeamMember, TeamMemberScanResult
)
