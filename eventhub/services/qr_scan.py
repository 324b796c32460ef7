"""
QR Scan & Verification Service

Turns a scanned string into a check-in (personal codes) or an info lookup
(event codes). Every scan is verified against the payload signature first;
the caller only ever learns that a code is "invalid or expired", never why.
Only staff (ADMIN / MASTER) may scan.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from eventhub import crud
from eventhub.core.exceptions import InvalidQRCode, RecordNotFound, ScanForbidden
from eventhub.core.signing import get_qr_signer
from eventhub.models.base import utcnow
from eventhub.models.user import STAFF_ROLES, UserRole
from eventhub.schemas.event import EventInfo
from eventhub.schemas.qr_payload import EventPayload, TeamMemberPayload, UserPayload
from eventhub.schemas.scan import (
    EventScanResult, RegistrationCheckIn, RegistrationEvent, ScanResult, UserScanResult
)
from eventhub.schemas.user import ScannedUser, StudentProfile
from eventhub.services.qr_payload import QRPayloadBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanContext:
    actor_id: str
    actor_role: UserRole
    event_id: Optional[str] = None  # Set when scanning at an event check-in desk


def ensure_can_scan(context: ScanContext) -> None:
    if context.actor_role not in STAFF_ROLES:
        logger.warning(f"Scan refused for user {context.actor_id} with role {context.actor_role}")
        raise ScanForbidden()


class QRScanService:
    def __init__(
        self,
        db: Session,
        builder: Optional[QRPayloadBuilder] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.builder = builder or QRPayloadBuilder(get_qr_signer())
        self.clock = clock

    def verify(self, raw: str):
        payload = self.builder.parse(raw)
        if payload is None:
            raise InvalidQRCode()
        return payload

    def scan(self, raw: str, context: ScanContext) -> ScanResult:
        payload = self.verify(raw)
        ensure_can_scan(context)

        if isinstance(payload, UserPayload):
            return self._scan_user(payload, context)
        if isinstance(payload, EventPayload):
            return self._scan_event(payload)
        if isinstance(payload, TeamMemberPayload):
            # Team-member codes are checked in against a hackathon schedule
            raise InvalidQRCode("Team member codes must be scanned at hackathon check-in")

        raise AssertionError(f"Unhandled QR payload type: {type(payload).__name__}")

    def _scan_user(self, payload: UserPayload, context: ScanContext) -> UserScanResult:
        user = crud.user.get_by_external_id(self.db, external_id=payload.user_id)
        if not user or not user.student:
            raise RecordNotFound("User not found")

        registration_info = None
        if context.event_id:
            registration_info = self._check_in(user.id, context)

        return UserScanResult(
            user=ScannedUser(
                name=user.full_name,
                email=user.email,
                role=user.role.value,
                student=StudentProfile.model_validate(user.student),
            ),
            registration=registration_info,
            scanned_at=self.clock(),
        )

    def _check_in(self, user_id: str, context: ScanContext) -> Optional[RegistrationCheckIn]:
        registration = crud.event_registration.get_for_user_event(
            self.db, user_id=user_id, event_id=context.event_id
        )
        if not registration:
            return None

        checked_in_now = crud.event_registration.mark_attended_once(
            self.db,
            db_obj=registration,
            checked_in_by=context.actor_id,
            checked_in_at=self.clock(),
        )
        if checked_in_now:
            logger.info(f"Checked in user {user_id} at event {context.event_id} (scanner {context.actor_id})")
        else:
            logger.info(f"User {user_id} already checked in at event {context.event_id}")

        return RegistrationCheckIn(
            id=registration.id,
            attended=registration.attended,
            checked_in_at=registration.checked_in_at,
            checked_in_now=checked_in_now,
            event=RegistrationEvent(
                name=registration.event.name,
                start_date=registration.event.start_date,
            ),
        )

    def _scan_event(self, payload: EventPayload) -> EventScanResult:
        event = crud.event.get(self.db, payload.event_id)
        if not event:
            raise RecordNotFound("Event not found")

        return EventScanResult(event=EventInfo.model_validate(event), scanned_at=self.clock())
