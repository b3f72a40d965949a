"""
Profile schemas for the consolidated "Me Now" / "Me Next" profile
"""
from pydantic import BaseModel, StrictStr


class ProfileUpdate(BaseModel):
    user_id: str
    me_now: StrictStr
    me_next: StrictStr


class MessageResponse(BaseModel):
    message: str


class AutoGenerateResponse(BaseModel):
    me_next: str
    generated: bool
