"""
Activity Router - log and list beach activities
"""
from datetime import datetime, timezone
from typing import List
from fastapi import APIRouter, Depends, status

from ..services.auth import get_current_user_id
from ..services.document_store import DocumentStore, get_store, user_collection
from ..schemas.activity import ActivityCreate, ActivityResponse, ActivityCreated

router = APIRouter(prefix="/api/activities", tags=["Activities"])


@router.post("", response_model=ActivityCreated, status_code=status.HTTP_201_CREATED)
async def log_activity(
    activity_data: ActivityCreate,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """Log a new activity with a server-side timestamp."""
    activity = {
        "description": activity_data.description,
        "date": activity_data.date,
        "category": activity_data.category,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    activity_id = await store.add(user_collection(user_id, "activities"), activity)

    return ActivityCreated(
        message="Activity logged successfully!",
        activity=ActivityResponse(id=activity_id, **activity),
    )


@router.get("", response_model=List[ActivityResponse])
async def list_activities(
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """All activities of the current user, newest first."""
    return await store.query(
        user_collection(user_id, "activities"),
        order_by="timestamp",
        descending=True,
    )
