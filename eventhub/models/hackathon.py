# File: eventhub/models/hackathon.py
from sqlalchemy import Column, String, Text, Boolean, Integer, ForeignKey, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from eventhub.models.base import BaseModel

class Hackathon(BaseModel):
    __tablename__ = "hackathons"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    location = Column(String(255))
    mode = Column(String(20), default="OFFLINE")
    poster_url = Column(String(500))
    organizer_name = Column(String(255))

    # Issued QR artifact (quick-access link)
    qr_code = Column(Text, nullable=True)
    qr_code_data = Column(Text, nullable=True)

    # Relationships
    teams = relationship("HackathonTeam", back_populates="hackathon", cascade="all, delete-orphan")
    schedules = relationship("HackathonAttendanceSchedule", back_populates="hackathon", cascade="all, delete-orphan")

class HackathonTeam(BaseModel):
    __tablename__ = "hackathon_teams"

    hackathon_id = Column(String(36), ForeignKey("hackathons.id"), nullable=False, index=True)
    team_name = Column(String(255), nullable=False)
    disqualified = Column(Boolean, nullable=False, default=False)

    # Relationships
    hackathon = relationship("Hackathon", back_populates="teams")
    members = relationship("HackathonTeamMember", back_populates="team", cascade="all, delete-orphan")

class HackathonTeamMember(BaseModel):
    __tablename__ = "hackathon_team_members"
    __table_args__ = (
        UniqueConstraint("team_id", "student_id", name="uq_team_member_team_student"),
    )

    team_id = Column(String(36), ForeignKey("hackathon_teams.id"), nullable=False, index=True)
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    is_leader = Column(Boolean, default=False)

    # Issued QR artifact (signed team-member payload)
    qr_code = Column(Text, nullable=True)
    qr_code_data = Column(Text, nullable=True)

    # Relationships
    team = relationship("HackathonTeam", back_populates="members")
    student = relationship("Student", back_populates="team_memberships")
    attendance_records = relationship("HackathonAttendance", back_populates="team_member", cascade="all, delete-orphan")

class HackathonAttendanceSchedule(BaseModel):
    __tablename__ = "hackathon_attendance_schedules"

    hackathon_id = Column(String(36), ForeignKey("hackathons.id"), nullable=False, index=True)
    day = Column(Integer, nullable=False)
    check_in_time = Column(DateTime(timezone=True), nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    hackathon = relationship("Hackathon", back_populates="schedules")
    attendance_records = relationship("HackathonAttendance", back_populates="schedule", cascade="all, delete-orphan")

class HackathonAttendance(BaseModel):
    __tablename__ = "hackathon_attendance"
    __table_args__ = (
        UniqueConstraint("attendance_schedule_id", "team_member_id", name="uq_attendance_schedule_member"),
    )

    attendance_schedule_id = Column(String(36), ForeignKey("hackathon_attendance_schedules.id"), nullable=False, index=True)
    team_member_id = Column(String(36), ForeignKey("hackathon_team_members.id"), nullable=False, index=True)
    is_present = Column(Boolean, nullable=False, default=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_in_by = Column(String(36), nullable=True)

    # Relationships
    schedule = relationship("HackathonAttendanceSchedule", back_populates="attendance_records")
    team_member = relationship("HackathonTeamMember", back_populates="attendance_records")
