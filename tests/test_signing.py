import hashlib
import hmac
import unittest

from eventhub.core.signing import DEVELOPMENT_QR_SECRET, QRSigner, resolve_qr_secret


class TestQRSigner(unittest.TestCase):
    """HMAC signing of QR payloads"""

    def setUp(self):
        self.signer = QRSigner("unit-test-secret")
        self.fields = {
            "id": "5f0c2a9e-0000-4000-8000-000000000001",
            "type": "teamMember",
            "userId": "student-1",
            "teamId": "team-1",
            "hackathonId": "hack-1",
            "timestamp": 1730000000000,
        }

    def _signed(self):
        return {**self.fields, "signature": self.signer.sign(self.fields)}

    def test_canonical_form_is_compact_and_ordered(self):
        fields = {"timestamp": 1700000000000, "userId": "u1", "type": "user", "id": "p1"}
        self.assertEqual(
            QRSigner.canonicalize(fields),
            '{"id":"p1","type":"user","userId":"u1","timestamp":1700000000000}'
        )

    def test_signature_is_hmac_sha256_of_canonical_form(self):
        fields = {"id": "p1", "type": "user", "userId": "u1", "timestamp": 1700000000000}
        expected = hmac.new(
            b"unit-test-secret",
            b'{"id":"p1","type":"user","userId":"u1","timestamp":1700000000000}',
            hashlib.sha256
        ).hexdigest()
        self.assertEqual(self.signer.sign(fields), expected)

    def test_sign_is_independent_of_key_order(self):
        reordered = dict(reversed(list(self.fields.items())))
        self.assertEqual(self.signer.sign(self.fields), self.signer.sign(reordered))

    def test_signed_payload_verifies(self):
        self.assertTrue(self.signer.verify(self._signed()))

    def test_changing_any_field_breaks_signature(self):
        for key in self.fields:
            with self.subTest(field=key):
                payload = self._signed()
                payload[key] = payload[key] + 1 if isinstance(payload[key], int) else payload[key] + "x"
                self.assertFalse(self.signer.verify(payload))

    def test_added_field_breaks_signature(self):
        payload = self._signed()
        payload["eventId"] = "event-1"
        self.assertFalse(self.signer.verify(payload))

    def test_other_secret_does_not_verify(self):
        self.assertFalse(QRSigner("another-secret").verify(self._signed()))

    def test_malformed_input_is_rejected_without_raising(self):
        unsigned = dict(self.fields)
        wrong_type = {**self.fields, "signature": 1234}
        unknown_field = {**self.fields, "role": "ADMIN", "signature": "00"}
        nested = {**self.fields, "userId": {"$ne": None}, "signature": "00"}
        non_ascii = {**self.fields, "signature": "\u00e9" * 64}
        lone_surrogate = {**self.fields, "signature": "\ud800" * 64}
        for payload in (None, "text", 42, [], unsigned, wrong_type, unknown_field, nested,
                        non_ascii, lone_surrogate):
            with self.subTest(payload=payload):
                self.assertFalse(self.signer.verify(payload))

    def test_null_field_added_to_signed_payload_is_rejected(self):
        payload = {"id": "p1", "type": "user", "userId": "u1", "timestamp": 1700000000000}
        payload["signature"] = self.signer.sign(payload)
        self.assertTrue(self.signer.verify(payload))

        payload["eventId"] = None
        self.assertFalse(self.signer.verify(payload))

    def test_unknown_fields_cannot_be_signed(self):
        with self.assertRaises(ValueError):
            self.signer.sign({**self.fields, "extra": "value"})

    def test_empty_secret_is_refused(self):
        with self.assertRaises(ValueError):
            QRSigner("")


class TestResolveQRSecret(unittest.TestCase):
    """Secret selection per environment"""

    def test_configured_secret_is_used(self):
        self.assertEqual(resolve_qr_secret("configured", "production"), "configured")

    def test_missing_secret_fails_in_production(self):
        with self.assertRaises(RuntimeError):
            resolve_qr_secret("", "production")

    def test_missing_secret_falls_back_outside_production(self):
        with self.assertLogs("eventhub.core.signing", level="WARNING"):
            self.assertEqual(resolve_qr_secret("", "development"), DEVELOPMENT_QR_SECRET)


if __name__ == '__main__':
    unittest.main()
