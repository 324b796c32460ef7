# File: eventhub/schemas/user.py
from pydantic import BaseModel
from typing import Optional
from eventhub.models.user import UserRole

class UserCreate(BaseModel):
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: UserRole = UserRole.STUDENT
    external_id: Optional[str] = None

class StudentCreate(BaseModel):
    user_id: str
    registration_number: str
    department: Optional[str] = None
    program: Optional[str] = None

class StudentProfile(BaseModel):
    registration_number: str
    department: Optional[str] = None
    program: Optional[str] = None

    class Config:
        from_attributes = True

class ScannedUser(BaseModel):
    name: str
    email: str
    role: str
    student: Optional[StudentProfile] = None
