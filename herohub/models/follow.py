"""
Follow model for hero follows
"""
from sqlalchemy import Column, Integer, Boolean, ForeignKey, DateTime, UniqueConstraint
from datetime import datetime

from herohub.core.database import Base


class Follow(Base):
    """Model for hero follows"""
    __tablename__ = "follows"
    
    follow_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    superhero_id = Column(Integer, nullable=False, index=True)
    # Rows are hard-deleted on unfollow; the flag is always TRUE while a row exists
    active = Column(Boolean, default=True, nullable=False)
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Unique constraint - user can only follow a hero once
    __table_args__ = (
        UniqueConstraint('user_id', 'superhero_id', name='unique_follow'),
    )
