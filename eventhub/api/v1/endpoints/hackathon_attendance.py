from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging
from eventhub import crud
from eventhub.api.deps import get_current_user, require_roles
from eventhub.core.exceptions import QRServiceError
from eventhub.db.database import get_db
from eventhub.models.user import User, UserRole, STAFF_ROLES
from eventhub.schemas.hackathon import (
    AttendanceRecord, AttendanceSchedule, AttendanceScheduleCreate,
    BulkAttendanceRequest, BulkAttendanceResult, MarkAttendanceRequest, ScheduleAttendanceDetails,
    TeamMemberScanRequest
)
from eventhub.schemas.scan import TeamMemberScanResult
from eventhub.services.hackathon_attendance import HackathonAttendanceService
from eventhub.services.qr_scan import ScanContext

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/attendance/scan", response_model=TeamMemberScanResult)
def scan_team_member_code(
    request: TeamMemberScanRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Staff scans a team member's QR code at a hackathon check-in slot"""
    context = ScanContext(actor_id=current_user.id, actor_role=current_user.role)

    try:
        return HackathonAttendanceService(db).scan_team_member(
            request.qr_code_data, request.schedule_id, context
        )
    except QRServiceError as e:
        logger.warning(f"Team member scan by {current_user.id} rejected: {e.status_code}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/attendance/single", response_model=AttendanceRecord)
def mark_single_attendance(
    request: MarkAttendanceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES))
):
    try:
        return HackathonAttendanceService(db).mark_single(
            request.schedule_id, request.team_id, request.student_id, current_user.id
        )
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/attendance/bulk", response_model=BulkAttendanceResult)
def mark_bulk_attendance(
    request: BulkAttendanceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.MASTER))
):
    """Mark every member of a team for one schedule"""
    try:
        return HackathonAttendanceService(db).mark_bulk(
            request.schedule_id, request.team_id, request.is_present, current_user.id
        )
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/attendance/schedules", response_model=AttendanceSchedule)
def create_attendance_schedule(
    schedule_in: AttendanceScheduleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.MASTER))
):
    if not crud.hackathon.get(db, schedule_in.hackathon_id):
        raise HTTPException(status_code=404, detail="Hackathon not found")

    schedule = crud.attendance_schedule.create(db, obj_in=schedule_in)
    logger.info(f"Created attendance schedule {schedule.id} (day {schedule.day}) for hackathon {schedule.hackathon_id}")
    return schedule

@router.get("/attendance/schedules", response_model=List[AttendanceSchedule])
def list_attendance_schedules(
    hackathon_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.MASTER))
):
    return crud.attendance_schedule.get_by_hackathon(db, hackathon_id=hackathon_id)

@router.get("/attendance/schedules/{schedule_id}", response_model=ScheduleAttendanceDetails)
def get_schedule_attendance(
    schedule_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*STAFF_ROLES))
):
    """Every team member of the hackathon with their status for one schedule"""
    try:
        return HackathonAttendanceService(db).schedule_details(schedule_id)
    except QRServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
