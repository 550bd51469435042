"""
Users API endpoints
Profiles, engagement dashboards, activity feed and leaderboard
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from herohub.core.database import get_db
from herohub.core.dependencies import get_current_user, ensure_correct_user
from herohub.models.user import User
from herohub.schemas.user import UpdateProfile, UserPublic, UserRegister, UserResponse
from herohub.services.activity_ledger import ActivityLedger
from herohub.services.aggregation_service import AggregationService
from herohub.services.user_service import UserDirectory
from herohub.utils.responses import page_response, success_response

router = APIRouter()


@router.post("/users", response_model=dict, status_code=status.HTTP_201_CREATED)
async def register_user(
    profile: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Register a user profile
    
    Credentials are issued by the identity service; this stores the profile only.
    """
    user = UserDirectory.register(db, profile)
    return success_response(
        UserResponse.model_validate(user).model_dump(mode="json"),
        message="User registered successfully"
    )


@router.get("/users", response_model=dict)
async def list_users(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List every user's public profile, ordered by username"""
    users = UserDirectory.list_all(db)
    return success_response(
        [UserPublic.model_validate(user).model_dump(mode="json") for user in users]
    )


@router.get("/users/{username}", response_model=dict)
async def get_user_view(
    username: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the engagement dashboard for the current user
    
    - **username**: Must be the current user's username
    
    Returns hero follows/likes, liked comments/images, global counts and connections
    """
    user = UserDirectory.get_by_username(db, username)
    ensure_correct_user(user.user_id, current_user)
    
    view = AggregationService.view_for(db, user.user_id)
    return success_response(view.model_dump(mode="json"))


@router.patch("/users/{username}", response_model=dict)
async def update_user(
    username: str,
    data: UpdateProfile,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Partially update the current user's profile"""
    user = UserDirectory.get_by_username(db, username)
    ensure_correct_user(user.user_id, current_user)
    
    user = UserDirectory.update(db, user.user_id, data)
    return success_response(
        UserResponse.model_validate(user).model_dump(mode="json"),
        message="Profile updated successfully"
    )


@router.delete("/users/{username}", response_model=dict)
async def delete_user(
    username: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete the current user's profile"""
    user = UserDirectory.get_by_username(db, username)
    ensure_correct_user(user.user_id, current_user)
    
    UserDirectory.remove(db, user.user_id)
    return success_response(message="User deleted successfully")


@router.get("/users/id/{user_id}", response_model=dict)
async def get_other_user_view(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get another user's public engagement view
    
    - **user_id**: User to look at
    """
    view = AggregationService.others_view(db, user_id)
    return success_response(view.model_dump(mode="json"))


@router.get("/users/id/{user_id}/activity", response_model=dict)
async def get_recent_activity(
    user_id: int,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get a user's recent activity, newest first
    
    - **user_id**: User ID
    - **page**: Page number
    - **per_page**: Items per page
    """
    entries = ActivityLedger.recent_for_user(db, user_id)
    
    return page_response(entries, page, per_page)


@router.get("/leaderboard", response_model=dict)
async def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the hero leaderboard
    
    - **limit**: Number of heroes (capped at LEADERBOARD_LIMIT)
    
    Returns heroes ordered by follow count with like and comment counts
    """
    ranks = AggregationService.leaderboard(db, limit)
    return success_response([rank.model_dump() for rank in ranks])
