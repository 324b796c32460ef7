# File: eventhub/schemas/event.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

class EventBase(BaseModel):
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    start_time: Optional[str] = None
    address: Optional[str] = None
    mode: Optional[str] = "OFFLINE"
    poster_url: Optional[str] = None
    organizer_name: Optional[str] = None

class EventCreate(EventBase):
    created_by_id: str

class EventInfo(EventBase):
    id: str

    class Config:
        from_attributes = True

class EventRegistrationCreate(BaseModel):
    user_id: str
    event_id: str

class EventRegistration(BaseModel):
    id: str
    user_id: str
    event_id: str
    attended: bool
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None

    class Config:
        from_attributes = True

class MarkEventAttendanceRequest(BaseModel):
    user_id: str = Field(..., alias="userId")
    event_id: str = Field(..., alias="eventId")

    class Config:
        populate_by_name = True
