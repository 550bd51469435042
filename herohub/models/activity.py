"""
Recent activity model - append-only engagement ledger
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime

from herohub.core.database import Base


class RecentActivity(Base):
    """One human-readable row per successful engagement action"""
    
    __tablename__ = "recent_activity"
    
    activity_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    username = Column(String, nullable=False)  # snapshot at write time
    superhero_id = Column(Integer, nullable=False, index=True)
    superhero_name = Column(String, nullable=True)  # snapshot at write time
    description = Column(String, nullable=False)
    
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    def __repr__(self):
        return f"<RecentActivity(activity_id={self.activity_id}, user_id={self.user_id}, description={self.description})>"
