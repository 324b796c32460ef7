# File: eventhub/models/user.py
from sqlalchemy import Column, String, Boolean, Enum, Text, ForeignKey
from sqlalchemy.orm import relationship
from eventhub.models.base import BaseModel, generate_uuid
import enum

class UserRole(enum.Enum):
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"
    MASTER = "MASTER"

# Roles allowed to scan codes and issue event / hackathon codes
STAFF_ROLES = (UserRole.ADMIN, UserRole.MASTER)

class User(BaseModel):
    __tablename__ = "users"

    # Identity assigned by the auth provider; this is what personal QR codes carry
    external_id = Column(String(255), unique=True, index=True, nullable=False, default=generate_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.STUDENT)
    is_active = Column(Boolean, default=True)

    # Issued QR artifact
    qr_code = Column(Text, nullable=True)
    qr_code_data = Column(Text, nullable=True)

    # Relationships
    student = relationship("Student", back_populates="user", uselist=False)
    registrations = relationship("EventRegistration", back_populates="user")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

class Student(BaseModel):
    __tablename__ = "students"

    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    registration_number = Column(String(50), unique=True, nullable=False)
    department = Column(String(255), nullable=True)
    program = Column(String(255), nullable=True)

    # Relationships
    user = relationship("User", back_populates="student")
    team_memberships = relationship("HackathonTeamMember", back_populates="student")
