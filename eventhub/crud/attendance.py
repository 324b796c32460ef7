# File: eventhub/crud/attendance.py
"""
Hackathon attendance records.

One row per (schedule, team member), enforced by a unique constraint. On
PostgreSQL and SQLite writes go through INSERT .. ON CONFLICT so concurrent
markers are serialised by the database; other dialects insert inside a
savepoint and treat the constraint violation as "already recorded".
"""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from eventhub.models.base import generate_uuid
from eventhub.models.hackathon import HackathonAttendance

logger = logging.getLogger(__name__)

_CONFLICT_COLUMNS = ["attendance_schedule_id", "team_member_id"]


def _dialect_insert(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    return None


def get_record(db: Session, *, schedule_id: str, team_member_id: str) -> Optional[HackathonAttendance]:
    return db.query(HackathonAttendance).filter(
        HackathonAttendance.attendance_schedule_id == schedule_id,
        HackathonAttendance.team_member_id == team_member_id
    ).first()


def get_by_schedule(db: Session, *, schedule_id: str) -> List[HackathonAttendance]:
    return db.query(HackathonAttendance).filter(HackathonAttendance.attendance_schedule_id == schedule_id).all()


def _insert_in_savepoint(db: Session, values: dict) -> bool:
    try:
        with db.begin_nested():
            db.add(HackathonAttendance(**values))
        return True
    except IntegrityError:
        logger.info(
            f"Attendance for member {values['team_member_id']} on schedule "
            f"{values['attendance_schedule_id']} recorded concurrently"
        )
        return False


def mark_present_once(
    db: Session, *, schedule_id: str, team_member_id: str, checked_in_by: str, checked_in_at: datetime
) -> bool:
    """Mark a member present unless already present; first check-in wins.

    Returns True when this call flipped the member to present.
    """
    values = {
        "id": generate_uuid(),
        "attendance_schedule_id": schedule_id,
        "team_member_id": team_member_id,
        "is_present": True,
        "checked_in_at": checked_in_at,
        "checked_in_by": checked_in_by,
    }

    insert = _dialect_insert(db)
    if insert is not None:
        stmt = insert(HackathonAttendance).values(**values).on_conflict_do_nothing(index_elements=_CONFLICT_COLUMNS)
        created = db.execute(stmt).rowcount == 1
    else:
        created = _insert_in_savepoint(db, values)

    if created:
        db.commit()
        return True

    # A record exists; only an absent one may be flipped
    flipped = db.query(HackathonAttendance).filter(
        HackathonAttendance.attendance_schedule_id == schedule_id,
        HackathonAttendance.team_member_id == team_member_id,
        HackathonAttendance.is_present == False  # noqa: E712
    ).update(
        {
            "is_present": True,
            "checked_in_at": checked_in_at,
            "checked_in_by": checked_in_by,
        },
        synchronize_session=False
    )
    db.commit()
    return flipped == 1


def upsert_attendance(
    db: Session, *, schedule_id: str, team_member_id: str, is_present: bool,
    checked_in_by: str, checked_in_at: datetime, commit: bool = True
) -> HackathonAttendance:
    """Create or overwrite the record for (schedule, member)."""
    values = {
        "id": generate_uuid(),
        "attendance_schedule_id": schedule_id,
        "team_member_id": team_member_id,
        "is_present": is_present,
        "checked_in_at": checked_in_at,
        "checked_in_by": checked_in_by,
    }

    insert = _dialect_insert(db)
    if insert is not None:
        stmt = insert(HackathonAttendance).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=_CONFLICT_COLUMNS,
            set_={
                "is_present": stmt.excluded.is_present,
                "checked_in_at": stmt.excluded.checked_in_at,
                "checked_in_by": stmt.excluded.checked_in_by,
                "updated_at": func.now(),
            }
        )
        db.execute(stmt)
    elif not _insert_in_savepoint(db, values):
        db.query(HackathonAttendance).filter(
            HackathonAttendance.attendance_schedule_id == schedule_id,
            HackathonAttendance.team_member_id == team_member_id
        ).update(
            {
                "is_present": is_present,
                "checked_in_at": checked_in_at,
                "checked_in_by": checked_in_by,
            },
            synchronize_session=False
        )

    if commit:
        db.commit()

    record = get_record(db, schedule_id=schedule_id, team_member_id=team_member_id)
    # Core statements bypass the identity map
    db.refresh(record)
    return record
