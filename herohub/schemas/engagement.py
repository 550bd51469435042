"""
Engagement action schemas
"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, Union


class EngagementAction(str, Enum):
    """Every engagement an actor can record against a hero"""
    FOLLOW = "follow"
    UNFOLLOW = "unfollow"
    LIKE = "like"
    UNLIKE = "unlike"
    COMMENT = "comment"
    COMMENT_LIKE = "comment_like"
    COMMENT_UNLIKE = "comment_unlike"
    IMAGE_LIKE = "image_like"
    IMAGE_UNLIKE = "image_unlike"
    UPLOAD_IMAGE = "upload_image"


class EngagementPayload(BaseModel):
    """Action-specific payload; which field is required depends on the action"""
    text: Optional[str] = None
    comment_id: Optional[int] = None
    image_url: Optional[str] = None


class EngagementRequest(EngagementPayload):
    """Schema for recording an engagement over HTTP"""
    action: EngagementAction
    username: str = Field(..., min_length=1)
    hero_id: int
    superhero_name: str = Field(..., min_length=1)


class EngagementResult(BaseModel):
    """Identifier of the primary mutated row"""
    action: EngagementAction
    event_id: Union[int, str]
