"""
Connections API endpoints
Peer follow requests and approvals
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from herohub.core.database import get_db
from herohub.core.dependencies import get_current_user, ensure_correct_user
from herohub.models.user import User
from herohub.services.connection_service import ConnectionService
from herohub.utils.responses import success_response

router = APIRouter()


@router.post("/users/{user_id}/connections/{target_id}", response_model=dict, status_code=status.HTTP_201_CREATED)
async def request_connection(
    user_id: int,
    target_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Ask to follow another user
    
    - **target_id**: User to follow; the request stays pending until they approve
    """
    ensure_correct_user(user_id, current_user)
    
    connection_id = ConnectionService.request(db, user_id, target_id)
    return success_response({"connection_id": connection_id}, message="Follow request sent")


@router.delete("/users/{user_id}/connections/{target_id}", response_model=dict)
async def remove_connection(
    user_id: int,
    target_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Unfollow a user, or withdraw a pending request"""
    ensure_correct_user(user_id, current_user)
    
    ConnectionService.remove(db, user_id, target_id, acting_user_id=current_user.user_id)
    return success_response(message="Connection removed")


@router.post("/users/{user_id}/followers/{requester_id}/approve", response_model=dict)
async def approve_follower(
    user_id: int,
    requester_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Approve a pending follow request addressed to the current user"""
    ensure_correct_user(user_id, current_user)
    
    ConnectionService.approve(db, requester_id, user_id, acting_user_id=current_user.user_id)
    return success_response(message="Follower approved")


@router.delete("/users/{user_id}/followers/{requester_id}", response_model=dict)
async def reject_follower(
    user_id: int,
    requester_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Reject a pending follow request addressed to the current user"""
    ensure_correct_user(user_id, current_user)
    
    ConnectionService.reject(db, requester_id, user_id, acting_user_id=current_user.user_id)
    return success_response(message="Follower rejected")
