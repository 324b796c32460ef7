"""
Hackathon Attendance Service

Marks team members present against attendance schedules (check-in slots
such as "Day 1, 9am"). Staff scan a member's team QR code, or mark members
by hand / a whole team at once. Per-schedule details list every member
with their record and the schedule totals.
"""

import logging
from typing import Callable, List

from sqlalchemy.orm import Session

from eventhub import crud
from eventhub.core.exceptions import AttendanceRejected, InvalidQRCode, RecordNotFound
from eventhub.models.base import utcnow
from eventhub.models.hackathon import HackathonAttendanceSchedule, HackathonTeam, HackathonTeamMember
from eventhub.schemas.hackathon import (
    AttendanceRecord, AttendanceSchedule, BulkAttendanceResult,
    ScheduleAttendanceDetails, ScheduleAttendanceStats, ScheduleMemberAttendance
)
from eventhub.schemas.qr_payload import TeamMemberPayload
from eventhub.schemas.scan import ScannedTeamMember, TeamMemberScanResult
from eventhub.services.qr_scan import QRScanService, ScanContext, ensure_can_scan

logger = logging.getLogger(__name__)


class HackathonAttendanceService:
    def __init__(self, db: Session, scanner: QRScanService = None, clock: Callable = utcnow):
        self.db = db
        self.scanner = scanner or QRScanService(db, clock=clock)
        self.clock = clock

    def _schedule(self, schedule_id: str) -> HackathonAttendanceSchedule:
        schedule = crud.attendance_schedule.get(self.db, schedule_id)
        if not schedule:
            raise RecordNotFound("Attendance schedule not found")
        return schedule

    def _active_team(self, team_id: str, hackathon_id: str) -> HackathonTeam:
        team = crud.hackathon_team.get_in_hackathon(self.db, team_id=team_id, hackathon_id=hackathon_id)
        if not team:
            raise RecordNotFound("Team not found in this hackathon")
        if team.disqualified:
            raise AttendanceRejected("Team is disqualified")
        return team

    def _member(self, team_id: str, student_id: str) -> HackathonTeamMember:
        member = crud.team_member.get_by_team_student(self.db, team_id=team_id, student_id=student_id)
        if not member:
            raise RecordNotFound("Team member not found")
        return member

    def scan_team_member(self, raw: str, schedule_id: str, context: ScanContext) -> TeamMemberScanResult:
        payload = self.scanner.verify(raw)
        ensure_can_scan(context)

        if not isinstance(payload, TeamMemberPayload):
            raise InvalidQRCode("Not a team member QR code")

        schedule = self._schedule(schedule_id)
        if schedule.hackathon_id != payload.hackathon_id:
            raise InvalidQRCode("QR code belongs to a different hackathon")

        team = self._active_team(payload.team_id, schedule.hackathon_id)
        member = self._member(team.id, payload.user_id)

        scanned_at = self.clock()
        checked_in_now = crud.attendance.mark_present_once(
            self.db,
            schedule_id=schedule.id,
            team_member_id=member.id,
            checked_in_by=context.actor_id,
            checked_in_at=scanned_at,
        )
        record = crud.attendance.get_record(self.db, schedule_id=schedule.id, team_member_id=member.id)
        self.db.refresh(record)

        logger.info(
            f"Team member {member.id} scanned for schedule {schedule.id}: "
            f"{'checked in' if checked_in_now else 'already present'}"
        )

        return TeamMemberScanResult(
            member=ScannedTeamMember(
                name=member.student.user.full_name,
                registration_number=member.student.registration_number,
                team_id=team.id,
                team_name=team.team_name,
            ),
            attendance=AttendanceRecord.model_validate(record),
            checked_in_now=checked_in_now,
            scanned_at=scanned_at,
        )

    def mark_single(self, schedule_id: str, team_id: str, student_id: str, actor_id: str) -> AttendanceRecord:
        """Manual mark; overwrites an existing record for the slot."""
        schedule = self._schedule(schedule_id)
        team = self._active_team(team_id, schedule.hackathon_id)
        member = self._member(team.id, student_id)

        record = crud.attendance.upsert_attendance(
            self.db,
            schedule_id=schedule.id,
            team_member_id=member.id,
            is_present=True,
            checked_in_by=actor_id,
            checked_in_at=self.clock(),
        )
        logger.info(f"Marked member {member.id} present for schedule {schedule.id} (by {actor_id})")
        return AttendanceRecord.model_validate(record)

    def mark_bulk(self, schedule_id: str, team_id: str, is_present: bool, actor_id: str) -> BulkAttendanceResult:
        schedule = self._schedule(schedule_id)
        team = crud.hackathon_team.get_in_hackathon(self.db, team_id=team_id, hackathon_id=schedule.hackathon_id)
        if not team:
            raise RecordNotFound("Team not found")

        now = self.clock()
        records: List[AttendanceRecord] = []
        for member in crud.team_member.get_by_team(self.db, team_id=team.id):
            record = crud.attendance.upsert_attendance(
                self.db,
                schedule_id=schedule.id,
                team_member_id=member.id,
                is_present=is_present,
                checked_in_by=actor_id,
                checked_in_at=now,
                commit=False,
            )
            records.append(AttendanceRecord.model_validate(record))
        self.db.commit()

        logger.info(f"Bulk attendance for team {team.id} on schedule {schedule.id}: {len(records)} members")
        return BulkAttendanceResult(
            team_id=team.id,
            team_name=team.team_name,
            member_count=len(records),
            records=records,
        )

    def schedule_details(self, schedule_id: str) -> ScheduleAttendanceDetails:
        """Every team member of the hackathon with their record for one schedule"""
        schedule = self._schedule(schedule_id)
        records = {
            record.team_member_id: record
            for record in crud.attendance.get_by_schedule(self.db, schedule_id=schedule.id)
        }

        members: List[ScheduleMemberAttendance] = []
        present_teams = 0
        teams = crud.hackathon_team.get_by_hackathon(self.db, hackathon_id=schedule.hackathon_id)
        for team in teams:
            team_present = False
            for member in sorted(team.members, key=lambda m: m.student.user.first_name):
                record = records.get(member.id)
                is_present = bool(record and record.is_present)
                team_present = team_present or is_present
                members.append(ScheduleMemberAttendance(
                    team_id=team.id,
                    team_name=team.team_name,
                    team_member_id=member.id,
                    student_id=member.student_id,
                    name=member.student.user.full_name,
                    registration_number=member.student.registration_number,
                    is_present=is_present,
                    checked_in_at=record.checked_in_at if record else None,
                    checked_in_by=record.checked_in_by if record else None,
                ))
            if team_present:
                present_teams += 1

        total_members = len(members)
        present_count = sum(1 for m in members if m.is_present)
        return ScheduleAttendanceDetails(
            schedule=AttendanceSchedule.model_validate(schedule),
            stats=ScheduleAttendanceStats(
                total_members=total_members,
                present_count=present_count,
                absent_count=total_members - present_count,
                attendance_percentage=(present_count * 100 + total_members // 2) // total_members if total_members else 0,
                total_teams=len(teams),
                present_teams=present_teams,
                absent_teams=len(teams) - present_teams,
            ),
            members=members,
        )
