"""
QR Code Issuance Service

Creates QR artifacts for users, events, hackathons and hackathon team members
and stores them on the owning row. An owner that already carries a code gets
that code back untouched, so a printed code stays valid for the owner's
lifetime unless an admin explicitly regenerates it.

Two flavours exist:
- secure codes encode a signed JSON payload (personal, team-member, event)
- quick-access codes encode a bare link to the event / hackathon page and
  carry no signature; they are for posters, never for check-in
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from eventhub import crud
from eventhub.core.config import settings
from eventhub.core.exceptions import RecordNotFound
from eventhub.core.signing import get_qr_signer
from eventhub.schemas.qr_payload import IssuedQRCode
from eventhub.services.qr_image import QRImageEncoder, secure_encoder, display_encoder
from eventhub.services.qr_payload import QRPayloadBuilder, serialize_payload

logger = logging.getLogger(__name__)


def event_url(event_id: str) -> str:
    return f"{settings.frontend_url}/events/{event_id}"


def hackathon_url(hackathon_id: str) -> str:
    return f"{settings.frontend_url}/hackathons/{hackathon_id}"


class QRCodeIssuanceService:
    def __init__(
        self,
        db: Session,
        builder: Optional[QRPayloadBuilder] = None,
        secure: Optional[QRImageEncoder] = None,
        display: Optional[QRImageEncoder] = None,
    ):
        self.db = db
        self.builder = builder or QRPayloadBuilder(get_qr_signer())
        self.secure = secure or secure_encoder()
        self.display = display or display_encoder()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _existing(db_obj) -> Optional[IssuedQRCode]:
        if db_obj.qr_code:
            return IssuedQRCode(qr_code=db_obj.qr_code, qr_code_data=db_obj.qr_code_data or "", created=False)
        return None

    def _save(self, crud_obj, db_obj, issued: IssuedQRCode, regenerate: bool = False) -> IssuedQRCode:
        if regenerate:
            crud_obj.save_qr_artifact(self.db, db_obj=db_obj, qr_code=issued.qr_code, qr_code_data=issued.qr_code_data)
            return issued

        if crud_obj.claim_qr_artifact(self.db, db_obj=db_obj, qr_code=issued.qr_code, qr_code_data=issued.qr_code_data):
            return issued

        # Lost a concurrent first issuance; hand back the code that was stored
        logger.info(f"QR code for {db_obj.__tablename__} {db_obj.id} was issued concurrently; returning stored code")
        return self._existing(db_obj)

    def _secure_code(self, payload) -> IssuedQRCode:
        data = serialize_payload(payload)
        return IssuedQRCode(qr_code=self.secure.encode(data), qr_code_data=data)

    def _link_code(self, url: str) -> IssuedQRCode:
        return IssuedQRCode(qr_code=self.display.encode(url), qr_code_data=url)

    def _get_or_404(self, crud_obj, id: str, label: str):
        db_obj = crud_obj.get(self.db, id)
        if not db_obj:
            raise RecordNotFound(f"{label} not found")
        return db_obj

    # ------------------------------------------------------------------
    # Secure (signed) codes
    # ------------------------------------------------------------------
    def issue_for_user(self, user_id: str, regenerate: bool = False) -> IssuedQRCode:
        user = self._get_or_404(crud.user, user_id, "User")

        existing = self._existing(user)
        if existing and not regenerate:
            return existing

        issued = self._secure_code(self.builder.build_user_payload(user.external_id))
        logger.info(f"Issued personal QR code for user {user.id}")
        return self._save(crud.user, user, issued, regenerate)

    def issue_for_event(self, event_id: str, regenerate: bool = False) -> IssuedQRCode:
        event = self._get_or_404(crud.event, event_id, "Event")

        existing = self._existing(event)
        if existing and not regenerate:
            return existing

        issued = self._secure_code(self.builder.build_event_payload(event.id, event.created_by_id))
        logger.info(f"Issued event QR code for event {event.id}")
        return self._save(crud.event, event, issued, regenerate)

    def issue_for_team_member(
        self,
        student_id: str,
        team_id: str,
        hackathon_id: str,
        persist: bool = True,
        regenerate: bool = False,
    ) -> IssuedQRCode:
        """Team-member code. Without persist the code is only rendered, no row is touched."""
        member = None
        if persist:
            member = crud.team_member.get_by_team_student(self.db, team_id=team_id, student_id=student_id)
            if not member:
                raise RecordNotFound("Team member not found")

            existing = self._existing(member)
            if existing and not regenerate:
                return existing

        issued = self._secure_code(
            self.builder.build_team_member_payload(student_id, team_id or "", hackathon_id)
        )
        if member is None:
            return issued

        logger.info(f"Issued team-member QR code for member {member.id} (team {team_id})")
        return self._save(crud.team_member, member, issued, regenerate)

    # ------------------------------------------------------------------
    # Quick-access (link) codes
    # ------------------------------------------------------------------
    def issue_event_link(self, event_id: str) -> IssuedQRCode:
        event = self._get_or_404(crud.event, event_id, "Event")
        return self._link_code(event_url(event.id))

    def issue_hackathon_link(self, hackathon_id: str, regenerate: bool = False) -> IssuedQRCode:
        hackathon = self._get_or_404(crud.hackathon, hackathon_id, "Hackathon")

        existing = self._existing(hackathon)
        if existing and not regenerate:
            return existing

        issued = self._link_code(hackathon_url(hackathon.id))
        logger.info(f"Issued quick-access QR code for hackathon {hackathon.id}")
        return self._save(crud.hackathon, hackathon, issued, regenerate)

    # ------------------------------------------------------------------
    # Lookups of already issued codes
    # ------------------------------------------------------------------
    def _issued_or_404(self, db_obj) -> IssuedQRCode:
        existing = self._existing(db_obj)
        if not existing:
            raise RecordNotFound("QR code not found. Please generate one first.")
        return existing

    def get_user_code(self, user_id: str) -> IssuedQRCode:
        return self._issued_or_404(self._get_or_404(crud.user, user_id, "User"))

    def get_event_code(self, event_id: str) -> IssuedQRCode:
        return self._issued_or_404(self._get_or_404(crud.event, event_id, "Event"))

    def get_hackathon_code(self, hackathon_id: str) -> IssuedQRCode:
        return self._issued_or_404(self._get_or_404(crud.hackathon, hackathon_id, "Hackathon"))

    def get_team_member_code(self, student_id: str, team_id: str) -> IssuedQRCode:
        member = crud.team_member.get_by_team_student(self.db, team_id=team_id, student_id=student_id)
        if not member:
            raise RecordNotFound("Team member not found")
        return self._issued_or_404(member)
