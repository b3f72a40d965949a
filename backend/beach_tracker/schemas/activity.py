from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ActivityCreate(BaseModel):
    description: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)  # ISO date from the client
    category: str = Field(..., min_length=1)


class ActivityResponse(BaseModel):
    id: Optional[str] = None
    description: str
    date: str
    category: str
    timestamp: datetime


class ActivityCreated(BaseModel):
    message: str
    activity: ActivityResponse
