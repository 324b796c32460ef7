import json
import unittest

from eventhub.core.signing import QRSigner
from eventhub.schemas.qr_payload import EventPayload, TeamMemberPayload, UserPayload
from eventhub.services.qr_payload import QRPayloadBuilder, serialize_payload


class TestQRPayloadBuilder(unittest.TestCase):
    """Building, serialising and parsing signed payloads"""

    def setUp(self):
        self.signer = QRSigner("payload-secret")
        self.builder = QRPayloadBuilder(
            self.signer,
            clock=lambda: 1730000000000,
            id_factory=lambda: "payload-1",
        )

    def test_user_payload(self):
        payload = self.builder.build_user_payload("ext-42")
        self.assertIsInstance(payload, UserPayload)
        self.assertEqual(payload.user_id, "ext-42")
        self.assertEqual(payload.id, "payload-1")
        self.assertEqual(payload.timestamp, 1730000000000)
        self.assertTrue(self.signer.verify(json.loads(serialize_payload(payload))))

    def test_event_payload_carries_creator_as_user(self):
        payload = self.builder.build_event_payload("event-9", "creator-3")
        self.assertIsInstance(payload, EventPayload)
        self.assertEqual(payload.event_id, "event-9")
        self.assertEqual(payload.user_id, "creator-3")

    def test_wire_format_field_order(self):
        payload = self.builder.build_team_member_payload("student-1", "team-1", "hack-1")
        wire = serialize_payload(payload)
        self.assertEqual(
            list(json.loads(wire).keys()),
            ["id", "type", "userId", "teamId", "hackathonId", "timestamp", "signature"]
        )
        self.assertTrue(wire.startswith('{"id":"payload-1","type":"teamMember","userId":"student-1"'))

    def test_parse_round_trip_keeps_type(self):
        built = self.builder.build_team_member_payload("student-1", "team-1", "hack-1")
        parsed = self.builder.parse(serialize_payload(built))
        self.assertIsInstance(parsed, TeamMemberPayload)
        self.assertEqual(parsed, built)

    def test_parse_accepts_any_key_order(self):
        built = self.builder.build_user_payload("ext-42")
        data = json.loads(serialize_payload(built))
        shuffled = json.dumps(dict(reversed(list(data.items()))))
        self.assertEqual(self.builder.parse(shuffled), built)

    def test_parse_rejects_tampered_user(self):
        data = json.loads(serialize_payload(self.builder.build_user_payload("ext-42")))
        data["userId"] = "ext-43"
        self.assertIsNone(self.builder.parse(json.dumps(data)))

    def test_parse_rejects_type_swap(self):
        data = json.loads(serialize_payload(self.builder.build_event_payload("event-9", "creator-3")))
        data["type"] = "user"
        self.assertIsNone(self.builder.parse(json.dumps(data)))

    def test_parse_rejects_correctly_signed_but_malformed_payload(self):
        # A user payload must not carry eventId, even when signed
        fields = {"id": "p", "type": "user", "userId": "u", "eventId": "e", "timestamp": 1}
        raw = json.dumps({**fields, "signature": self.signer.sign(fields)})
        self.assertIsNone(self.builder.parse(raw))

    def test_parse_rejects_non_json(self):
        for raw in ("", "not json", "https://events.example.edu/events/1", "[1, 2]", "null"):
            with self.subTest(raw=raw):
                self.assertIsNone(self.builder.parse(raw))

    def test_fresh_ids_per_build(self):
        builder = QRPayloadBuilder(self.signer)
        first = builder.build_user_payload("ext-42")
        second = builder.build_user_payload("ext-42")
        self.assertNotEqual(first.id, second.id)


if __name__ == '__main__':
    unittest.main()
