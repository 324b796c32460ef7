from .user import user, student
from .event import event, event_registration
from .hackathon import hackathon, hackathon_team, team_member, attendance_schedule
from . import attendance

__all__ = [
    "user", "student", "event", "event_registration",
    "hackathon", "hackathon_team", "team_member", "attendance_schedule", "attendance",
]
