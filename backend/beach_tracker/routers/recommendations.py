"""
Recommendation Router - AI development goals for the current profile
"""
from datetime import datetime, timezone
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from ..services.auth import get_current_user_id
from ..services.document_store import DocumentStore, USERS, get_store, user_collection
from ..services.recommendations import Recommendation, RecommendationService, get_recommendation_service
from ..schemas.recommendation import RecommendationRecord

router = APIRouter(prefix="/api/recommendations", tags=["Recommendations"])


@router.post("", response_model=List[Recommendation])
async def generate_recommendations(
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Generate recommendations and keep a copy for history."""
    profile = await store.get(USERS, user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found. Please set up your profile first."
        )

    recommendations = await service.generate(
        profile.get("me_now", ""),
        profile.get("me_next", ""),
    )

    await store.add(
        user_collection(user_id, "recommendations"),
        {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "profile_snapshot": {
                "me_now": profile.get("me_now", ""),
                "me_next": profile.get("me_next", ""),
            },
            "recommendations": [r.model_dump(mode="json") for r in recommendations],
        },
    )
    return recommendations


@router.get("/history", response_model=List[RecommendationRecord])
async def list_recommendation_history(
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """Previously generated recommendations, newest first."""
    return await store.query(
        user_collection(user_id, "recommendations"),
        order_by="timestamp",
        descending=True,
    )
