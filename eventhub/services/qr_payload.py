"""
QR Payload Builder

Builds the three signed payload kinds carried by QR codes and parses scanned
strings back into them. Builders only read the clock and generate ids; all
persistence lives in the issuance service.
"""

import json
import logging
import time
import uuid
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from eventhub.core.signing import CANONICAL_FIELDS, QRSigner
from eventhub.schemas.qr_payload import QRPayload, UserPayload, EventPayload, TeamMemberPayload

logger = logging.getLogger(__name__)

_payload_adapter = TypeAdapter(QRPayload)


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _new_payload_id() -> str:
    return str(uuid.uuid4())


class QRPayloadBuilder:
    def __init__(
        self,
        signer: QRSigner,
        clock: Callable[[], int] = _epoch_millis,
        id_factory: Callable[[], str] = _new_payload_id,
    ):
        self.signer = signer
        self.clock = clock
        self.id_factory = id_factory

    def _signed(self, model, fields: dict):
        fields = {"id": self.id_factory(), **fields, "timestamp": self.clock()}
        return model.model_validate({**fields, "signature": self.signer.sign(fields)})

    def build_user_payload(self, subject_id: str) -> UserPayload:
        return self._signed(UserPayload, {"type": "user", "userId": subject_id})

    def build_event_payload(self, event_id: str, created_by_id: str) -> EventPayload:
        return self._signed(EventPayload, {"type": "event", "userId": created_by_id, "eventId": event_id})

    def build_team_member_payload(self, subject_id: str, team_id: str, hackathon_id: str) -> TeamMemberPayload:
        return self._signed(
            TeamMemberPayload,
            {"type": "teamMember", "userId": subject_id, "teamId": team_id, "hackathonId": hackathon_id},
        )

    def parse(self, raw: str) -> Optional[QRPayload]:
        """Verify and type a scanned string; None when it is not a valid code."""
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Rejected QR code: not valid JSON")
            return None

        if not self.signer.verify(data):
            logger.warning("Rejected QR code: signature mismatch")
            return None

        try:
            return _payload_adapter.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Rejected QR code: unexpected payload shape ({e.error_count()} errors)")
            return None


def serialize_payload(payload: QRPayload) -> str:
    """Wire JSON for a payload, field order matching the signed form."""
    fields = payload.signed_fields()
    wire = {name: fields[name] for name in CANONICAL_FIELDS if name in fields}
    wire["signature"] = payload.signature
    return json.dumps(wire, separators=(",", ":"), ensure_ascii=False)
