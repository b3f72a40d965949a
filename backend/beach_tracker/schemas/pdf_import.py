"""
PDF import schemas
"""
from typing import Optional
from pydantic import BaseModel

from ..services.profile_parser import ParsedDocument, ProfileType
from ..services.profile_summary import GeneratedProfile
from ..services.profile_import import ImportHistoryEntry


class ImportResponse(BaseModel):
    message: str
    parsed_data: ParsedDocument
    generated_profile: GeneratedProfile
    consolidated_profile: GeneratedProfile
    profile_type: ProfileType


class ImportHistoryResponse(BaseModel):
    jigsaw: Optional[ImportHistoryEntry] = None
    pathways: Optional[ImportHistoryEntry] = None
    workday: Optional[ImportHistoryEntry] = None
