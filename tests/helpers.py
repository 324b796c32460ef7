import os
import tempfile
import unittest
from datetime import date, datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from eventhub.db.database import Base
from eventhub.models import (
    User, UserRole, Student, Event, EventRegistration,
    Hackathon, HackathonTeam, HackathonTeamMember, HackathonAttendanceSchedule
)


class DatabaseTestCase(unittest.TestCase):
    """Fresh SQLite file database per test class, emptied before each test"""

    @classmethod
    def setUpClass(cls):
        cls.db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        cls.engine = create_engine(
            f"sqlite:///{cls.db_path}", connect_args={"check_same_thread": False}
        )
        Base.metadata.create_all(cls.engine)
        cls.TestSession = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)

    @classmethod
    def tearDownClass(cls):
        cls.engine.dispose()
        os.close(cls.db_fd)
        os.unlink(cls.db_path)

    def setUp(self):
        session = self.TestSession()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()
        self.db = self.TestSession()

    def tearDown(self):
        self.db.close()

    # ============== FACTORIES ==============

    def _add(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def make_user(self, email, role=UserRole.STUDENT, external_id=None, is_active=True):
        user = User(
            email=email,
            first_name=email.split("@")[0].title(),
            last_name="Tester",
            role=role,
            is_active=is_active,
        )
        if external_id:
            user.external_id = external_id
        return self._add(user)

    def make_student(self, user, registration_number):
        return self._add(Student(
            user_id=user.id,
            registration_number=registration_number,
            department="Computer Science",
            program="BSc",
        ))

    def make_event(self, creator, name="Tech Talk"):
        return self._add(Event(
            name=name,
            start_date=date(2026, 11, 2),
            end_date=date(2026, 11, 2),
            start_time="10:00",
            address="Main Hall",
            created_by_id=creator.id,
        ))

    def register(self, user, event):
        return self._add(EventRegistration(user_id=user.id, event_id=event.id, attended=False))

    def make_hackathon(self, name="Campus Hack"):
        return self._add(Hackathon(
            name=name,
            start_date=date(2026, 11, 10),
            end_date=date(2026, 11, 12),
        ))

    def make_team(self, hackathon, name="Null Pointers", disqualified=False):
        return self._add(HackathonTeam(hackathon_id=hackathon.id, team_name=name, disqualified=disqualified))

    def make_member(self, team, student, is_leader=False):
        return self._add(HackathonTeamMember(team_id=team.id, student_id=student.id, is_leader=is_leader))

    def make_schedule(self, hackathon, day=1):
        return self._add(HackathonAttendanceSchedule(
            hackathon_id=hackathon.id,
            day=day,
            check_in_time=datetime(2026, 11, 9 + day, 9, 0, tzinfo=timezone.utc),
            description=f"Day {day} morning",
        ))


def naive(value):
    """SQLite drops tzinfo; compare datetimes without it."""
    return value.replace(tzinfo=None) if value is not None else None
