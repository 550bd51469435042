"""
FastAPI dependencies for actor resolution

Credential checks live upstream; the authenticated actor id reaches this
service in the X-User-Id header.
"""
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from typing import Optional

from herohub.core.database import get_db
from herohub.core.exceptions import UnauthorizedError
from herohub.models.user import User


async def get_current_user(
    x_user_id: Optional[int] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the authenticated actor
    
    Raises:
        UnauthorizedError: If the header is missing or the user is unknown/inactive
    """
    if x_user_id is None:
        raise UnauthorizedError("Missing actor identity")
    
    user = db.query(User).filter(User.user_id == x_user_id).first()
    if user is None or not user.active:
        raise UnauthorizedError("Unknown actor", detail=f"user_id={x_user_id}")
    
    return user


def ensure_correct_user(user_id: int, current_user: User) -> None:
    """Raise unless the path actor is the authenticated actor"""
    if current_user.user_id != user_id:
        raise UnauthorizedError(
            "Actor may only act on their own behalf",
            detail=f"user_id={user_id}"
        )
