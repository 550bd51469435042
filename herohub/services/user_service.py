"""
User directory
Profile lookups and updates for the actors the engagement core keys on
"""
import logging
from datetime import datetime
from sqlalchemy.orm import Session
from typing import List

from herohub.core.exceptions import BadRequestError, NotFoundError
from herohub.models.user import User
from herohub.schemas.user import UpdateProfile, UserRegister

logger = logging.getLogger(__name__)


class UserDirectory:
    """Service for user profile operations"""
    
    @staticmethod
    def get(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.user_id == user_id).first()
        if not user:
            raise NotFoundError(f"No user: {user_id}")
        return user
    
    @staticmethod
    def list_all(db: Session) -> List[User]:
        """Every registered user, alphabetical by username"""
        return db.query(User).order_by(User.username.asc()).all()
    
    @staticmethod
    def get_by_username(db: Session, username: str) -> User:
        user = db.query(User).filter(User.username == username).first()
        if not user:
            raise NotFoundError(f"No user: {username}")
        return user
    
    @staticmethod
    def register(db: Session, profile: UserRegister) -> User:
        """
        Register a profile
        
        Raises:
            BadRequestError: On duplicate username
        """
        if db.query(User.user_id).filter(User.username == profile.username).first():
            raise BadRequestError(f"Duplicate username: {profile.username}")
        
        user = User(**profile.model_dump(), active=True)
        db.add(user)
        db.commit()
        db.refresh(user)
        
        logger.info(f"Registered user {user.user_id} ({user.username})")
        return user
    
    @staticmethod
    def update(db: Session, user_id: int, data: UpdateProfile) -> User:
        """
        Partial profile update
        
        Only fields present in the request are changed.
        """
        user = UserDirectory.get(db, user_id)
        
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        user.last_updated_dt = datetime.utcnow()
        
        db.commit()
        db.refresh(user)
        return user
    
    @staticmethod
    def remove(db: Session, user_id: int) -> None:
        user = UserDirectory.get(db, user_id)
        db.delete(user)
        db.commit()
        logger.info(f"Removed user {user_id}")
