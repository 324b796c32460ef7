from .base import BaseModel
from .user import User, UserRole, Student, STAFF_ROLES
from .event import Event, EventRegistration
from .hackathon import (
    Hackathon, HackathonTeam, HackathonTeamMember,
    HackathonAttendanceSchedule, HackathonAttendance
)

__all__ = [
    "BaseModel", "User", "UserRole", "Student", "STAFF_ROLES",
    "Event", "EventRegistration",
    "Hackathon", "HackathonTeam", "HackathonTeamMember",
    "HackathonAttendanceSchedule", "HackathonAttendance",
]
