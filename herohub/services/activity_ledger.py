"""
Activity Ledger
Append-only feed of human-readable engagement rows
"""
import logging
from sqlalchemy.orm import Session
from typing import List, Optional

from herohub.core.exceptions import NotFoundError
from herohub.models.activity import RecentActivity
from herohub.models.user import User
from herohub.schemas.views import ActivityEntry
from herohub.utils.formatting import format_date, format_time

logger = logging.getLogger(__name__)


class ActivityLedger:
    """Writes and reads the recent_activity table; rows are never updated or deleted"""
    
    @staticmethod
    def append(
        db: Session,
        user_id: int,
        username: str,
        superhero_id: int,
        superhero_name: Optional[str],
        description: str
    ) -> int:
        """
        Stage one activity row in the caller's transaction
        
        The caller owns commit/rollback so the entry lands together with
        the engagement it describes.
        
        Returns:
            activity_id of the new row
        """
        entry = RecentActivity(
            user_id=user_id,
            username=username,
            superhero_id=superhero_id,
            superhero_name=superhero_name,
            description=description
        )
        db.add(entry)
        db.flush()
        
        if entry.activity_id is None:
            raise NotFoundError(f"No {description} activity: {superhero_id}")
        
        return entry.activity_id
    
    @staticmethod
    def recent_for_user(db: Session, user_id: int) -> List[ActivityEntry]:
        """
        Get a user's activity feed, newest first
        
        Raises:
            NotFoundError: If the user does not exist
        """
        if db.query(User.user_id).filter(User.user_id == user_id).first() is None:
            raise NotFoundError(f"No user: {user_id}")
        
        rows = db.query(RecentActivity).filter(
            RecentActivity.user_id == user_id
        ).order_by(
            RecentActivity.created_dt.desc(),
            RecentActivity.activity_id.desc()
        ).all()
        
        return [
            ActivityEntry(
                activity_id=row.activity_id,
                user_id=row.user_id,
                username=row.username,
                superhero_id=row.superhero_id,
                superhero_name=row.superhero_name,
                description=row.description,
                created_dt=row.created_dt,
                created_date=format_date(row.created_dt),
                created_time=format_time(row.created_dt)
            )
            for row in rows
        ]
