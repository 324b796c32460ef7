# File: eventhub/crud/event.py
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from eventhub.core.exceptions import AttendanceConflict, RecordNotFound
from eventhub.crud.base import CRUDBase
from eventhub.models.event import Event, EventRegistration
from eventhub.schemas.event import EventCreate, EventRegistrationCreate

class CRUDEvent(CRUDBase[Event, EventCreate]):
    pass

class CRUDEventRegistration(CRUDBase[EventRegistration, EventRegistrationCreate]):

    def get_for_user_event(self, db: Session, *, user_id: str, event_id: str) -> Optional[EventRegistration]:
        return db.query(EventRegistration).filter(
            EventRegistration.user_id == user_id,
            EventRegistration.event_id == event_id
        ).first()

    def register(self, db: Session, *, user_id: str, event_id: str) -> EventRegistration:
        """Create the registration; a second one for the same pair is a conflict."""
        db_obj = EventRegistration(user_id=user_id, event_id=event_id, attended=False)
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise AttendanceConflict("Already registered for this event")
        db.refresh(db_obj)
        return db_obj

    def mark_attended_once(
        self, db: Session, *, db_obj: EventRegistration, checked_in_by: str, checked_in_at: datetime
    ) -> bool:
        """Check the registration in unless it already is.

        A single conditional UPDATE, so concurrent scans of the same
        registration cannot both win. Returns True for the scan that flipped it.
        """
        flipped = db.query(EventRegistration).filter(
            EventRegistration.id == db_obj.id,
            EventRegistration.attended == False  # noqa: E712
        ).update(
            {
                "attended": True,
                "checked_in_at": checked_in_at,
                "checked_in_by": checked_in_by,
            },
            synchronize_session=False
        )
        db.commit()
        db.refresh(db_obj)
        return flipped == 1

    def mark_attended(
        self, db: Session, *, user_id: str, event_id: str, checked_in_by: str, checked_in_at: datetime
    ) -> EventRegistration:
        """Manual check-in by an organiser; overwrites any earlier check-in."""
        db_obj = self.get_for_user_event(db, user_id=user_id, event_id=event_id)
        if not db_obj:
            raise RecordNotFound("Registration not found")

        db_obj.attended = True
        db_obj.checked_in_at = checked_in_at
        db_obj.checked_in_by = checked_in_by
        db.commit()
        db.refresh(db_obj)
        return db_obj

event = CRUDEvent(Event)
event_registration = CRUDEventRegistration(EventRegistration)
