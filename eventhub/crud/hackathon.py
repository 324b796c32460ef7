# File: eventhub/crud/hackathon.py
from typing import List, Optional
from sqlalchemy.orm import Session
from eventhub.crud.base import CRUDBase
from eventhub.models.hackathon import (
    Hackathon, HackathonTeam, HackathonTeamMember, HackathonAttendanceSchedule
)
from eventhub.schemas.hackathon import (
    HackathonCreate, HackathonTeamCreate, HackathonTeamMemberCreate, AttendanceScheduleCreate
)

class CRUDHackathon(CRUDBase[Hackathon, HackathonCreate]):
    pass

class CRUDHackathonTeam(CRUDBase[HackathonTeam, HackathonTeamCreate]):

    def get_in_hackathon(self, db: Session, *, team_id: str, hackathon_id: str) -> Optional[HackathonTeam]:
        return db.query(HackathonTeam).filter(
            HackathonTeam.id == team_id,
            HackathonTeam.hackathon_id == hackathon_id
        ).first()

    def get_by_hackathon(self, db: Session, *, hackathon_id: str) -> List[HackathonTeam]:
        return (
            db.query(HackathonTeam)
            .filter(HackathonTeam.hackathon_id == hackathon_id)
            .order_by(HackathonTeam.team_name)
            .all()
        )

class CRUDHackathonTeamMember(CRUDBase[HackathonTeamMember, HackathonTeamMemberCreate]):

    def get_by_team_student(self, db: Session, *, team_id: str, student_id: str) -> Optional[HackathonTeamMember]:
        return db.query(HackathonTeamMember).filter(
            HackathonTeamMember.team_id == team_id,
            HackathonTeamMember.student_id == student_id
        ).first()

    def get_by_team(self, db: Session, *, team_id: str) -> List[HackathonTeamMember]:
        return db.query(HackathonTeamMember).filter(HackathonTeamMember.team_id == team_id).all()

class CRUDAttendanceSchedule(CRUDBase[HackathonAttendanceSchedule, AttendanceScheduleCreate]):

    def get_by_hackathon(self, db: Session, *, hackathon_id: str) -> List[HackathonAttendanceSchedule]:
        return (
            db.query(HackathonAttendanceSchedule)
            .filter(HackathonAttendanceSchedule.hackathon_id == hackathon_id)
            .order_by(HackathonAttendanceSchedule.day, HackathonAttendanceSchedule.check_in_time)
            .all()
        )

hackathon = CRUDHackathon(Hackathon)
hackathon_team = CRUDHackathonTeam(HackathonTeam)
team_member = CRUDHackathonTeamMember(HackathonTeamMember)
attendance_schedule = CRUDAttendanceSchedule(HackathonAttendanceSchedule)
