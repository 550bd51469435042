"""
Read-side view schemas built by the aggregation engine
"""
from pydantic import BaseModel, Field, computed_field
from typing import Dict, List, Optional
from datetime import datetime
from herohub.schemas.common import ORMConfig
from herohub.schemas.user import UserPublic


class PublicEngagementView(BaseModel):
    """What anyone may see about an actor's hero engagement"""
    user: UserPublic
    hero_follow_ids: List[int] = Field(default_factory=list)
    hero_like_ids: List[int] = Field(default_factory=list)


class UserEngagementView(PublicEngagementView):
    """Dashboard for the actor themselves, including global counts"""
    
    # This actor's liked comments/images, each paired with its grouped count
    comment_liked: Dict[int, int] = Field(default_factory=dict)
    image_liked: Dict[str, int] = Field(default_factory=dict)
    
    # Global per-hero counts
    hero_follow_counts: Dict[int, int] = Field(default_factory=dict)
    hero_like_counts: Dict[int, int] = Field(default_factory=dict)
    hero_comment_counts: Dict[int, int] = Field(default_factory=dict)
    hero_image_counts: Dict[int, int] = Field(default_factory=dict)
    
    # Global per-comment / per-image like counts
    comment_like_counts: Dict[int, int] = Field(default_factory=dict)
    image_like_counts: Dict[str, int] = Field(default_factory=dict)
    
    # Peer connections
    following_ids: List[int] = Field(default_factory=list)
    pending_following_ids: List[int] = Field(default_factory=list)
    follower_ids: List[int] = Field(default_factory=list)
    pending_follower_ids: List[int] = Field(default_factory=list)
    
    @computed_field
    @property
    def comment_liked_ids(self) -> List[int]:
        return list(self.comment_liked)
    
    @computed_field
    @property
    def image_liked_urls(self) -> List[str]:
        return list(self.image_liked)


class HeroRank(BaseModel):
    """Leaderboard entry"""
    superhero_id: int
    follow_count: int
    like_count: int = 0
    comment_count: int = 0


class ActivityEntry(BaseModel):
    """Row of the recent activity feed"""
    model_config = ORMConfig
    
    activity_id: int
    user_id: int
    username: str
    superhero_id: int
    superhero_name: Optional[str] = None
    description: str
    created_dt: datetime
    created_date: str
    created_time: str


class HeroComment(BaseModel):
    """Comment shown on a hero page"""
    comment_id: int
    user_id: int
    username: str
    superhero_id: int
    comments: str
    created_dt: datetime
    created_date: str
    created_time: str


class HeroImage(BaseModel):
    """Image shown on a hero page"""
    image_id: int
    image_url: str
    user_id: int
    username: str
    superhero_id: int
    created_dt: datetime
    created_date: str
    created_time: str
