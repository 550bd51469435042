"""
User connection model - peer follow requests
"""
from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from datetime import datetime

from herohub.core.database import Base


# Status code written on request; approval only flips `active`
CONNECTION_STATUS_REQUESTED = 0


class UserConnection(Base):
    """
    Ordered (connector -> connectee) follow relationship between two users
    
    Pending while active is FALSE, approved once the connectee flips it to
    TRUE. Rejecting or unfollowing deletes the row.
    """
    
    __tablename__ = "user_connections"
    
    connection_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    connector_user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    connectee_user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    
    status = Column(Integer, default=CONNECTION_STATUS_REQUESTED, nullable=False)
    active = Column(Boolean, default=False, nullable=False)
    
    created_dt = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    __table_args__ = (
        UniqueConstraint('connector_user_id', 'connectee_user_id', name='unique_connection'),
    )
    
    @property
    def is_pending(self) -> bool:
        """Check if the request is still awaiting approval"""
        return not self.active
    
    def __repr__(self):
        return f"<UserConnection(connector={self.connector_user_id}, connectee={self.connectee_user_id}, active={self.active})>"
