"""
Aggregation Engine
Per-user and global engagement views, recomputed from the event tables on every call
"""
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from typing import Dict, List, Optional

from herohub.core.config import settings
from herohub.core.exceptions import NotFoundError
from herohub.models.comment import Comment, CommentLike
from herohub.models.connection import UserConnection
from herohub.models.follow import Follow
from herohub.models.image import Image, ImageLike
from herohub.models.like import Like
from herohub.models.user import User
from herohub.schemas.user import UserPublic
from herohub.schemas.views import (
    HeroComment,
    HeroImage,
    HeroRank,
    PublicEngagementView,
    UserEngagementView,
)
from herohub.utils.formatting import format_date, format_time


class AggregationService:
    """Read side of the engagement ledger. No counters are cached."""
    
    @staticmethod
    def view_for(db: Session, user_id: int) -> UserEngagementView:
        """
        Build the dashboard view for the actor themselves
        
        Args:
            db: Database session
            user_id: Anchor actor
            
        Returns:
            UserEngagementView with the actor's own engagement state,
            global per-hero/per-comment/per-image counts and connection sets
            
        Raises:
            NotFoundError: If the anchor actor does not exist
        """
        user = AggregationService._get_user(db, user_id)
        public = AggregationService._hero_state(db, user)
        
        return UserEngagementView(
            user=public.user,
            hero_follow_ids=public.hero_follow_ids,
            hero_like_ids=public.hero_like_ids,
            
            # Grouped by the key it filters on, so each count is per-actor
            comment_liked=AggregationService._counts(
                db, CommentLike.comment_id, CommentLike.user_id == user_id
            ),
            image_liked=AggregationService._counts(
                db, ImageLike.image_url, ImageLike.user_id == user_id
            ),
            
            hero_follow_counts=AggregationService._counts(
                db, Follow.superhero_id, Follow.active.is_(True)
            ),
            hero_like_counts=AggregationService._counts(
                db, Like.superhero_id, Like.active.is_(True)
            ),
            hero_comment_counts=AggregationService._counts(
                db, Comment.superhero_id, Comment.active.is_(True)
            ),
            hero_image_counts=AggregationService._counts(
                db, Image.superhero_id, Image.active.is_(True)
            ),
            comment_like_counts=AggregationService._counts(db, CommentLike.comment_id),
            image_like_counts=AggregationService._counts(db, ImageLike.image_url),
            
            following_ids=AggregationService._connections(db, user_id, outgoing=True, active=True),
            pending_following_ids=AggregationService._connections(db, user_id, outgoing=True, active=False),
            follower_ids=AggregationService._connections(db, user_id, outgoing=False, active=True),
            pending_follower_ids=AggregationService._connections(db, user_id, outgoing=False, active=False),
        )
    
    @staticmethod
    def others_view(db: Session, user_id: int) -> PublicEngagementView:
        """
        Build the view shown when looking at another actor
        
        Only hero follow/like sets; no global counts or connections.
        """
        user = AggregationService._get_user(db, user_id)
        return AggregationService._hero_state(db, user)
    
    @staticmethod
    def leaderboard(db: Session, limit: Optional[int] = None) -> List[HeroRank]:
        """
        Rank heroes by active follow count
        
        Ties are broken by superhero_id ascending. Heroes without an active
        follow do not appear. The limit is clamped to LEADERBOARD_LIMIT.
        """
        cap = settings.LEADERBOARD_LIMIT
        limit = cap if limit is None else max(1, min(limit, cap))
        
        like_count = select(func.count(Like.like_id)).where(
            Like.active.is_(True),
            Like.superhero_id == Follow.superhero_id
        ).correlate(Follow).scalar_subquery()
        
        comment_count = select(func.count(Comment.comment_id)).where(
            Comment.active.is_(True),
            Comment.superhero_id == Follow.superhero_id
        ).correlate(Follow).scalar_subquery()
        
        follow_count = func.count(Follow.follow_id).label("follow_count")
        
        rows = db.query(
            Follow.superhero_id,
            follow_count,
            like_count.label("like_count"),
            comment_count.label("comment_count")
        ).filter(
            Follow.active.is_(True)
        ).group_by(
            Follow.superhero_id
        ).order_by(
            follow_count.desc(),
            Follow.superhero_id.asc()
        ).limit(limit).all()
        
        return [
            HeroRank(
                superhero_id=row.superhero_id,
                follow_count=int(row.follow_count),
                like_count=int(row.like_count or 0),
                comment_count=int(row.comment_count or 0)
            )
            for row in rows
        ]
    
    @staticmethod
    def hero_comments(db: Session, hero_id: int) -> List[HeroComment]:
        """Get active comments by active users on a hero, newest first"""
        rows = db.query(Comment, User.username).join(
            User, Comment.user_id == User.user_id
        ).filter(
            Comment.superhero_id == hero_id,
            Comment.active.is_(True),
            User.active.is_(True)
        ).order_by(
            Comment.created_dt.desc(),
            Comment.comment_id.desc()
        ).all()
        
        return [
            HeroComment(
                comment_id=comment.comment_id,
                user_id=comment.user_id,
                username=username,
                superhero_id=comment.superhero_id,
                comments=comment.comments,
                created_dt=comment.created_dt,
                created_date=format_date(comment.created_dt),
                created_time=format_time(comment.created_dt)
            )
            for comment, username in rows
        ]
    
    @staticmethod
    def hero_images(db: Session, hero_id: int) -> List[HeroImage]:
        """Get active images by active users for a hero, newest first"""
        rows = db.query(Image, User.username).join(
            User, Image.user_id == User.user_id
        ).filter(
            Image.superhero_id == hero_id,
            Image.active.is_(True),
            User.active.is_(True)
        ).order_by(
            Image.created_dt.desc(),
            Image.image_id.desc()
        ).all()
        
        return [
            HeroImage(
                image_id=image.image_id,
                image_url=image.image_url,
                user_id=image.user_id,
                username=username,
                superhero_id=image.superhero_id,
                created_dt=image.created_dt,
                created_date=format_date(image.created_dt),
                created_time=format_time(image.created_dt)
            )
            for image, username in rows
        ]
    
    @staticmethod
    def _get_user(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.user_id == user_id).first()
        if not user:
            raise NotFoundError(f"No user: {user_id}")
        return user
    
    @staticmethod
    def _hero_state(db: Session, user: User) -> PublicEngagementView:
        follow_ids = db.query(Follow.superhero_id).filter(
            Follow.user_id == user.user_id,
            Follow.active.is_(True)
        ).order_by(Follow.superhero_id.asc()).all()
        
        like_ids = db.query(Like.superhero_id).filter(
            Like.user_id == user.user_id,
            Like.active.is_(True)
        ).order_by(Like.superhero_id.asc()).all()
        
        return PublicEngagementView(
            user=UserPublic.model_validate(user),
            hero_follow_ids=[row.superhero_id for row in follow_ids],
            hero_like_ids=[row.superhero_id for row in like_ids],
        )
    
    @staticmethod
    def _counts(db: Session, key, *filters) -> Dict:
        """COUNT(*) grouped by key, as {key: count}"""
        rows = db.query(key, func.count().label("total")).filter(
            *filters
        ).group_by(key).order_by(key.asc()).all()
        
        return {row[0]: int(row.total) for row in rows}
    
    @staticmethod
    def _connections(db: Session, user_id: int, outgoing: bool, active: bool) -> List[int]:
        """Ids on the other side of the user's connections in one direction/state"""
        if outgoing:
            anchor, other = UserConnection.connector_user_id, UserConnection.connectee_user_id
        else:
            anchor, other = UserConnection.connectee_user_id, UserConnection.connector_user_id
        
        rows = db.query(other).filter(
            anchor == user_id,
            UserConnection.active.is_(active)
        ).order_by(other.asc()).all()
        
        return [row[0] for row in rows]
