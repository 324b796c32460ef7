"""
QR Payload Signing

Computes and verifies the HMAC-SHA256 signature carried by every signed QR
payload. The secret is handed in at construction; one signer is built per
process from settings (see get_qr_signer).
"""

import hmac
import hashlib
import json
import logging
from functools import lru_cache
from typing import Any, Mapping

from eventhub.core.config import settings

logger = logging.getLogger(__name__)

# Serialisation order of the signed fields. Matches the order codes were
# originally issued with, so previously printed codes keep verifying.
CANONICAL_FIELDS = ("id", "type", "userId", "eventId", "teamId", "hackathonId", "timestamp")

DEVELOPMENT_QR_SECRET = "development-only-qr-secret"


class QRSigner:
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("QR signing secret must not be empty")
        self._key = secret.encode("utf-8")

    @staticmethod
    def canonicalize(fields: Mapping[str, Any]) -> str:
        """Compact JSON of the known fields in CANONICAL_FIELDS order.

        Absent (or None) fields are omitted. Unknown fields raise ValueError.
        """
        unknown = set(fields) - set(CANONICAL_FIELDS)
        if unknown:
            raise ValueError(f"Unexpected payload fields: {sorted(unknown)}")

        ordered = {name: fields[name] for name in CANONICAL_FIELDS if fields.get(name) is not None}
        return json.dumps(ordered, separators=(",", ":"), ensure_ascii=False)

    def sign(self, fields: Mapping[str, Any]) -> str:
        """Hex HMAC-SHA256 over the canonical form of a payload without its signature."""
        message = self.canonicalize(fields).encode("utf-8")
        return hmac.new(self._key, message, hashlib.sha256).hexdigest()

    def verify(self, payload: Any) -> bool:
        """True only if payload["signature"] matches the other fields.

        Malformed input of any shape yields False.
        """
        if not isinstance(payload, Mapping):
            return False

        signature = payload.get("signature")
        if not isinstance(signature, str):
            return False

        fields = {key: value for key, value in payload.items() if key != "signature"}
        # A present-but-null field is a mutation, even though signing omits it
        if any(value is None for value in fields.values()):
            return False

        try:
            expected = self.sign(fields)
        except (TypeError, ValueError):
            return False

        # Compare bytes; str comparison rejects non-ASCII input with TypeError
        return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8", "surrogatepass"))


def resolve_qr_secret(secret: str = None, environment: str = None) -> str:
    """Return the configured secret, failing closed in production."""
    secret = secret if secret is not None else settings.QR_CODE_SECRET
    environment = (environment or settings.ENVIRONMENT).lower()

    if secret:
        return secret

    if environment == "production":
        raise RuntimeError("QR_CODE_SECRET is not configured; refusing to sign QR codes in production")

    logger.warning(
        "⚠️ QR_CODE_SECRET is not set - using the development QR secret. "
        "Codes issued now are forgeable and must not be used outside development."
    )
    return DEVELOPMENT_QR_SECRET


@lru_cache()
def get_qr_signer() -> QRSigner:
    return QRSigner(resolve_qr_secret())
