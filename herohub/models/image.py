"""
Image models for hero image uploads and image likes
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from herohub.core.database import Base


class Image(Base):
    """Uploaded media asset attached to a hero"""
    
    __tablename__ = "images"
    
    image_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    superhero_id = Column(Integer, nullable=False, index=True)
    
    image_url = Column(String, nullable=False, index=True)
    active = Column(Boolean, default=True, nullable=False)
    
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    user = relationship("User", lazy="select")
    
    def __repr__(self):
        return f"<Image(image_id={self.image_id}, superhero_id={self.superhero_id}, url={self.image_url})>"


class ImageLike(Base):
    """
    Model for image likes
    
    Keyed by URL rather than image_id, so uploads sharing a URL share likes.
    """
    
    __tablename__ = "image_likes"
    
    image_like_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    image_url = Column(String, nullable=False, index=True)
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    __table_args__ = (
        UniqueConstraint('user_id', 'image_url', name='unique_image_like'),
    )
