"""
Comment models for hero comments and comment likes
"""
from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from herohub.core.database import Base


class Comment(Base):
    """Comment left on a hero page"""
    
    __tablename__ = "comments"
    
    comment_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    superhero_id = Column(Integer, nullable=False, index=True)
    
    comments = Column(Text, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    user = relationship("User", lazy="select")
    
    def __repr__(self):
        return f"<Comment(comment_id={self.comment_id}, superhero_id={self.superhero_id}, user_id={self.user_id})>"


class CommentLike(Base):
    """Model for comment likes"""
    
    __tablename__ = "comment_likes"
    
    comment_like_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    comment_id = Column(Integer, ForeignKey('comments.comment_id', ondelete='CASCADE'), nullable=False, index=True)
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    __table_args__ = (
        UniqueConstraint('user_id', 'comment_id', name='unique_comment_like'),
    )
