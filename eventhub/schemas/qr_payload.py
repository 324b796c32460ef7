# File: eventhub/schemas/qr_payload.py
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from typing import Annotated, Literal, Union


class _QRPayloadBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    id: StrictStr
    user_id: StrictStr = Field(alias="userId")
    timestamp: StrictInt
    signature: StrictStr

    def signed_fields(self) -> dict:
        """Wire fields covered by the signature."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"signature"})


class UserPayload(_QRPayloadBase):
    type: Literal["user"] = "user"


class EventPayload(_QRPayloadBase):
    type: Literal["event"] = "event"
    event_id: StrictStr = Field(alias="eventId")


class TeamMemberPayload(_QRPayloadBase):
    type: Literal["teamMember"] = "teamMember"
    team_id: StrictStr = Field(alias="teamId")
    hackathon_id: StrictStr = Field(alias="hackathonId")


QRPayload = Annotated[
    Union[UserPayload, EventPayload, TeamMemberPayload],
    Field(discriminator="type"),
]


class IssuedQRCode(BaseModel):
    qr_code: str  # Base64 PNG, no data: prefix
    qr_code_data: str  # The encoded text (payload JSON or URL)
    created: bool = True  # False when an existing artifact was returned

