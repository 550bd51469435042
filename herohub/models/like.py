"""
Like model for hero likes
"""
from sqlalchemy import Column, Integer, Boolean, ForeignKey, DateTime, UniqueConstraint
from datetime import datetime

from herohub.core.database import Base


class Like(Base):
    """Model for hero likes"""
    __tablename__ = "likes"
    
    like_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    superhero_id = Column(Integer, nullable=False, index=True)
    active = Column(Boolean, default=True, nullable=False)
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Unique constraint - user can only like a hero once
    __table_args__ = (
        UniqueConstraint('user_id', 'superhero_id', name='unique_like'),
    )
