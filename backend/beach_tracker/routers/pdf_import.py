"""
PDF Import Router - Jigsaw / Pathways / Workday profile imports
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File, status

from ..services.auth import get_current_user_id
from ..services.pdf_extractor import ExtractionError
from ..services.profile_parser import ProfileType, InvalidProfileType
from ..services.profile_import import (
    ProfileImportService, ProfileNotFound, SourceProfile, get_import_service
)
from ..schemas.pdf_import import ImportResponse, ImportHistoryResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pdf-import", tags=["PDF Import"])


def _parse_profile_type(value: str) -> ProfileType:
    try:
        return ProfileType.parse(value)
    except InvalidProfileType as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/import/{profile_type}", response_model=ImportResponse)
async def import_pdf(
    profile_type: str,
    request: Request,
    pdf: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    service: ProfileImportService = Depends(get_import_service),
):
    """
    Import one exported PDF and refresh the consolidated profile.

    The profile type is validated before the upload is read. Only the
    imported profile type's data is replaced; the other two are kept.
    """
    profile_type = _parse_profile_type(profile_type)

    if pdf is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No PDF file uploaded."
        )

    if pdf.content_type != "application/pdf":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are allowed"
        )

    pdf_bytes = await pdf.read()

    max_bytes = request.app.state.settings.max_upload_bytes
    if len(pdf_bytes) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size must be less than {max_bytes // (1024 * 1024)}MB"
        )

    try:
        result = await service.import_pdf(user_id, profile_type, pdf_bytes, pdf.filename)
    except ExtractionError as e:
        logger.warning(f"PDF extraction failed for user {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Failed to extract text from PDF"
        )
    except Exception:
        logger.exception(f"Error processing {profile_type.value} PDF for user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process PDF"
        )

    return ImportResponse(
        message=f"{profile_type.value} PDF imported successfully",
        parsed_data=result.parsed_data,
        generated_profile=result.generated_profile,
        consolidated_profile=result.consolidated_profile,
        profile_type=result.profile_type,
    )


@router.get("/history", response_model=ImportHistoryResponse)
async def get_import_history(
    user_id: str = Depends(get_current_user_id),
    service: ProfileImportService = Depends(get_import_service),
):
    """When each profile type was last imported, and from which file."""
    try:
        history = await service.get_history(user_id)
    except ProfileNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ImportHistoryResponse(**history)


@router.get("/profile/{profile_type}", response_model=SourceProfile)
async def get_source_profile(
    profile_type: str,
    user_id: str = Depends(get_current_user_id),
    service: ProfileImportService = Depends(get_import_service),
):
    """Stored data of the latest import of one profile type."""
    profile_type = _parse_profile_type(profile_type)
    try:
        return await service.get_source_profile(user_id, profile_type)
    except ProfileNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
