"""
User model - SQLAlchemy ORM
Profile attributes only; credentials are managed by the identity service
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from datetime import datetime

from herohub.core.database import Base


class User(Base):
    """Actor that engages with heroes and connects with other actors"""
    
    __tablename__ = "users"
    
    user_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    username = Column(String, unique=True, nullable=False, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    location = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    
    active = Column(Boolean, default=True, nullable=False)
    
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_updated_dt = Column(DateTime, nullable=True)
    
    def __repr__(self):
        return f"<User(user_id={self.user_id}, username={self.username})>"
