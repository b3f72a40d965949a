"""
Profile Router - consolidated "Me Now" / "Me Next" profile
"""
from fastapi import APIRouter, Depends, HTTPException, status

from ..services.auth import get_current_user_id
from ..services.document_store import DocumentStore, USERS, get_store
from ..services.profile_import import ProfileImportService, get_import_service
from ..schemas.profile import ProfileUpdate, MessageResponse, AutoGenerateResponse

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("/{user_id}")
async def get_profile(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """Get the stored user document."""
    if current_user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized access to profile"
        )

    profile = await store.get(USERS, user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return profile


@router.post("", response_model=MessageResponse)
async def save_profile(
    update_data: ProfileUpdate,
    current_user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """Manual edit of the consolidated fields. Imported data is left alone."""
    if current_user_id != update_data.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized profile update"
        )

    await store.set(
        USERS,
        update_data.user_id,
        {"me_now": update_data.me_now, "me_next": update_data.me_next},
        merge=True,
    )
    return MessageResponse(message="Profile saved successfully")


@router.post("/me-next/auto-generate", response_model=AutoGenerateResponse)
async def auto_generate_me_next(
    current_user_id: str = Depends(get_current_user_id),
    service: ProfileImportService = Depends(get_import_service),
):
    """
    Suggest "Me Next" from imported Pathways / Workday (or Jigsaw) data.

    The suggestion is returned, not saved; the client saves it through
    POST /api/profile.
    """
    me_next = await service.auto_generate_me_next(current_user_id)
    return AutoGenerateResponse(me_next=me_next, generated=bool(me_next))
