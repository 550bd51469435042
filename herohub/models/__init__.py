"""
Models package - Import all models here for easy access
"""
from herohub.models.user import User
from herohub.models.follow import Follow
from herohub.models.like import Like
from herohub.models.comment import Comment, CommentLike
from herohub.models.image import Image, ImageLike
from herohub.models.activity import RecentActivity
from herohub.models.connection import UserConnection

__all__ = [
    # User
    "User",
    
    # Hero engagement
    "Follow",
    "Like",
    "Comment",
    "CommentLike",
    "Image",
    "ImageLike",
    
    # Ledger
    "RecentActivity",
    
    # Peer connections
    "UserConnection",
]
