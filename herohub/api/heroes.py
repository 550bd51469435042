"""
Heroes API endpoints
Engagement actions and hero comment/image listings
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from herohub.core.database import get_db
from herohub.core.dependencies import get_current_user, ensure_correct_user
from herohub.models.user import User
from herohub.schemas.engagement import EngagementPayload, EngagementRequest, EngagementResult
from herohub.services.aggregation_service import AggregationService
from herohub.services.engagement_recorder import EngagementRecorder
from herohub.utils.responses import page_response, success_response

router = APIRouter()


@router.post("/users/{user_id}/engagements", response_model=dict, status_code=status.HTTP_201_CREATED)
async def record_engagement(
    user_id: int,
    engagement: EngagementRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Record an engagement with a hero
    
    - **action**: follow, unfollow, like, unlike, comment, comment_like,
      comment_unlike, image_like, image_unlike, upload_image
    - **username** / **superhero_name**: Snapshots for the activity feed
    - **hero_id**: Target hero
    - **text** / **comment_id** / **image_url**: Action-specific payload
    
    Returns the id of the row that was inserted or removed
    """
    ensure_correct_user(user_id, current_user)
    
    payload = EngagementPayload(
        text=engagement.text,
        comment_id=engagement.comment_id,
        image_url=engagement.image_url
    )
    event_id = EngagementRecorder.record(
        db,
        engagement.action,
        user_id,
        engagement.username,
        engagement.hero_id,
        engagement.superhero_name,
        payload
    )
    
    result = EngagementResult(action=engagement.action, event_id=event_id)
    return success_response(result.model_dump(mode="json"))


@router.get("/heroes/{hero_id}/comments", response_model=dict)
async def list_hero_comments(
    hero_id: int,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get comments for a hero, newest first
    
    - **hero_id**: Hero ID
    - **page**: Page number
    - **per_page**: Items per page
    """
    comments = AggregationService.hero_comments(db, hero_id)
    
    return page_response(comments, page, per_page)


@router.get("/heroes/{hero_id}/images", response_model=dict)
async def list_hero_images(
    hero_id: int,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get uploaded images for a hero, newest first
    
    - **hero_id**: Hero ID
    - **page**: Page number
    - **per_page**: Items per page
    """
    images = AggregationService.hero_images(db, hero_id)
    
    return page_response(images, page, per_page)
