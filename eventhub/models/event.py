# File: eventhub/models/event.py
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from eventhub.models.base import BaseModel

class Event(BaseModel):
    __tablename__ = "events"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    start_time = Column(String(20))

    # Location
    address = Column(Text)
    mode = Column(String(20), default="OFFLINE")  # ONLINE | OFFLINE

    # Media / organiser
    poster_url = Column(String(500))
    organizer_name = Column(String(255))

    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    # Issued QR artifact (signed event payload)
    qr_code = Column(Text, nullable=True)
    qr_code_data = Column(Text, nullable=True)

    # Relationships
    created_by = relationship("User")
    registrations = relationship("EventRegistration", back_populates="event", cascade="all, delete-orphan")

class EventRegistration(BaseModel):
    __tablename__ = "event_registrations"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_event_registration_user_event"),
    )

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)

    # Check-in
    attended = Column(Boolean, nullable=False, default=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_in_by = Column(String(36), nullable=True)  # Scanner who checked the user in

    # Relationships
    user = relationship("User", back_populates="registrations")
    event = relationship("Event", back_populates="registrations")
