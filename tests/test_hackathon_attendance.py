import unittest
from datetime import datetime, timedelta, timezone

from eventhub import crud
from eventhub.core.exceptions import AttendanceRejected, InvalidQRCode, RecordNotFound, ScanForbidden
from eventhub.core.signing import QRSigner
from eventhub.models import HackathonAttendance, UserRole
from eventhub.services.hackathon_attendance import HackathonAttendanceService
from eventhub.services.qr_issuance import QRCodeIssuanceService
from eventhub.services.qr_payload import QRPayloadBuilder
from eventhub.services.qr_scan import QRScanService, ScanContext
from tests.helpers import DatabaseTestCase, naive

CHECK_IN = datetime(2026, 11, 10, 9, 2, tzinfo=timezone.utc)


class TestHackathonAttendance(DatabaseTestCase):
    """Team member check-in against attendance schedules"""

    def setUp(self):
        super().setUp()
        self.builder = QRPayloadBuilder(QRSigner("hackathon-secret"))
        self.issuer = QRCodeIssuanceService(self.db, builder=self.builder)
        self.service = self._service(self.db, CHECK_IN)

        self.master = self.make_user("master@uni.edu", role=UserRole.MASTER)
        self.staff = ScanContext(actor_id=self.master.id, actor_role=UserRole.MASTER)

        self.hackathon = self.make_hackathon()
        self.day_one = self.make_schedule(self.hackathon, day=1)
        self.team = self.make_team(self.hackathon)

        self.students = []
        for i, name in enumerate(("alice", "bob", "carol"), start=1):
            user = self.make_user(f"{name}@uni.edu")
            student = self.make_student(user, f"CS/00{i}/2024")
            self.make_member(self.team, student, is_leader=(i == 1))
            self.students.append(student)

    def _service(self, db, now):
        return HackathonAttendanceService(
            db,
            scanner=QRScanService(db, builder=self.builder, clock=lambda: now),
            clock=lambda: now,
        )

    def _code(self, student, team=None, hackathon=None):
        team = team or self.team
        hackathon = hackathon or self.hackathon
        return self.issuer.issue_for_team_member(student.id, team.id, hackathon.id).qr_code_data

    def test_scan_marks_member_present(self):
        result = self.service.scan_team_member(self._code(self.students[0]), self.day_one.id, self.staff)

        self.assertTrue(result.checked_in_now)
        self.assertTrue(result.attendance.is_present)
        self.assertEqual(result.member.team_name, "Null Pointers")
        self.assertEqual(result.member.registration_number, "CS/001/2024")
        self.assertEqual(result.attendance.checked_in_by, self.master.id)

    def test_second_scan_keeps_first_check_in(self):
        code = self._code(self.students[0])
        self.service.scan_team_member(code, self.day_one.id, self.staff)

        later = self._service(self.db, CHECK_IN + timedelta(minutes=10))
        result = later.scan_team_member(code, self.day_one.id, self.staff)

        self.assertFalse(result.checked_in_now)
        self.assertEqual(naive(result.attendance.checked_in_at), naive(CHECK_IN))
        self.assertEqual(self.db.query(HackathonAttendance).count(), 1)

    def test_scan_flips_member_marked_absent(self):
        self.service.mark_bulk(self.day_one.id, self.team.id, False, self.master.id)

        result = self.service.scan_team_member(self._code(self.students[1]), self.day_one.id, self.staff)

        self.assertTrue(result.checked_in_now)
        self.assertTrue(result.attendance.is_present)
        self.assertEqual(self.db.query(HackathonAttendance).count(), 3)

    def test_each_schedule_is_separate(self):
        day_two = self.make_schedule(self.hackathon, day=2)
        code = self._code(self.students[0])

        self.service.scan_team_member(code, self.day_one.id, self.staff)
        result = self.service.scan_team_member(code, day_two.id, self.staff)

        self.assertTrue(result.checked_in_now)
        self.assertEqual(self.db.query(HackathonAttendance).count(), 2)

    def test_students_cannot_scan(self):
        student = ScanContext(actor_id="someone", actor_role=UserRole.STUDENT)
        with self.assertRaises(ScanForbidden):
            self.service.scan_team_member(self._code(self.students[0]), self.day_one.id, student)

    def test_personal_code_is_rejected(self):
        user_code = self.issuer.issue_for_user(self.students[0].user_id).qr_code_data
        with self.assertRaises(InvalidQRCode):
            self.service.scan_team_member(user_code, self.day_one.id, self.staff)

    def test_code_for_other_hackathon_is_rejected(self):
        other = self.make_hackathon("Other Hack")
        other_schedule = self.make_schedule(other, day=1)
        with self.assertRaises(InvalidQRCode):
            self.service.scan_team_member(self._code(self.students[0]), other_schedule.id, self.staff)

    def test_unknown_schedule(self):
        with self.assertRaises(RecordNotFound):
            self.service.scan_team_member(self._code(self.students[0]), "missing", self.staff)

    def test_disqualified_team_is_rejected(self):
        code = self._code(self.students[0])
        self.team.disqualified = True
        self.db.commit()

        with self.assertRaises(AttendanceRejected):
            self.service.scan_team_member(code, self.day_one.id, self.staff)
        self.assertEqual(self.db.query(HackathonAttendance).count(), 0)

    def test_removed_member_is_not_found(self):
        code = self._code(self.students[2])
        member = crud.team_member.get_by_team_student(self.db, team_id=self.team.id, student_id=self.students[2].id)
        self.db.delete(member)
        self.db.commit()

        with self.assertRaises(RecordNotFound):
            self.service.scan_team_member(code, self.day_one.id, self.staff)

    def test_mark_single_overwrites(self):
        self.service.mark_bulk(self.day_one.id, self.team.id, False, self.master.id)

        record = self.service.mark_single(self.day_one.id, self.team.id, self.students[0].id, "admin-2")

        self.assertTrue(record.is_present)
        self.assertEqual(record.checked_in_by, "admin-2")
        self.assertEqual(self.db.query(HackathonAttendance).count(), 3)

    def test_mark_single_for_non_member(self):
        outsider = self.make_student(self.make_user("dave@uni.edu"), "CS/009/2024")
        with self.assertRaises(RecordNotFound):
            self.service.mark_single(self.day_one.id, self.team.id, outsider.id, self.master.id)

    def test_bulk_marks_every_member(self):
        result = self.service.mark_bulk(self.day_one.id, self.team.id, True, self.master.id)

        self.assertEqual(result.member_count, 3)
        self.assertTrue(all(record.is_present for record in result.records))
        self.assertEqual(
            self.db.query(HackathonAttendance).filter(HackathonAttendance.is_present == True).count(),  # noqa: E712
            3
        )

    def test_bulk_for_team_in_other_hackathon(self):
        other_team = self.make_team(self.make_hackathon("Other Hack"), name="Elsewhere")
        with self.assertRaises(RecordNotFound):
            self.service.mark_bulk(self.day_one.id, other_team.id, True, self.master.id)

    def test_schedule_details_counts_members_and_teams(self):
        self.service.scan_team_member(self._code(self.students[1]), self.day_one.id, self.staff)
        second_team = self.make_team(self.hackathon, name="Off By One")
        dave = self.make_student(self.make_user("dave@uni.edu"), "CS/004/2024")
        self.make_member(second_team, dave)

        details = self.service.schedule_details(self.day_one.id)

        self.assertEqual(details.schedule.id, self.day_one.id)
        self.assertEqual(details.stats.total_members, 4)
        self.assertEqual(details.stats.present_count, 1)
        self.assertEqual(details.stats.absent_count, 3)
        self.assertEqual(details.stats.attendance_percentage, 25)
        self.assertEqual(details.stats.total_teams, 2)
        self.assertEqual(details.stats.present_teams, 1)
        self.assertEqual(details.stats.absent_teams, 1)

        present = [m for m in details.members if m.is_present]
        self.assertEqual([m.registration_number for m in present], ["CS/002/2024"])
        self.assertEqual(present[0].checked_in_by, self.master.id)
        self.assertEqual(present[0].name, "Bob Tester")

    def test_schedule_details_rounds_percentage(self):
        self.service.mark_single(self.day_one.id, self.team.id, self.students[0].id, self.master.id)
        self.assertEqual(self.service.schedule_details(self.day_one.id).stats.attendance_percentage, 33)

        self.service.mark_single(self.day_one.id, self.team.id, self.students[1].id, self.master.id)
        self.assertEqual(self.service.schedule_details(self.day_one.id).stats.attendance_percentage, 67)

    def test_schedule_details_marked_absent_is_not_present(self):
        self.service.mark_bulk(self.day_one.id, self.team.id, False, self.master.id)

        details = self.service.schedule_details(self.day_one.id)

        self.assertEqual(details.stats.present_count, 0)
        self.assertEqual(details.stats.present_teams, 0)
        self.assertTrue(all(m.checked_in_by == self.master.id for m in details.members))

    def test_schedule_details_without_teams(self):
        empty = self.make_schedule(self.make_hackathon("Empty Hack"))

        details = self.service.schedule_details(empty.id)

        self.assertEqual(details.members, [])
        self.assertEqual(details.stats.attendance_percentage, 0)
        self.assertEqual(details.stats.total_teams, 0)

    def test_schedule_details_for_unknown_schedule(self):
        with self.assertRaises(RecordNotFound):
            self.service.schedule_details("missing")


if __name__ == '__main__':
    unittest.main()
