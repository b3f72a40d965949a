from pydantic import BaseModel, Field
from typing import List
from datetime import datetime

from ..services.recommendations import Recommendation


class RecommendationRecord(BaseModel):
    """One stored generation, with the profile it was based on"""
    id: str
    timestamp: datetime
    profile_snapshot: dict = Field(default_factory=dict)
    recommendations: List[Recommendation] = Field(default_factory=list)
