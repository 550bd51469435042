"""
User Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from herohub.schemas.common import ORMConfig


# ============ Request Schemas ============

class UserRegister(BaseModel):
    """Schema for registering a profile"""
    username: str = Field(..., min_length=1, max_length=50)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    location: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)


class UpdateProfile(BaseModel):
    """Schema for a partial profile update"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    location: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)


# ============ Response Schemas ============

class UserPublic(BaseModel):
    """Public user profile"""
    model_config = ORMConfig
    
    user_id: int
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None


class UserResponse(UserPublic):
    """Full user record"""
    active: bool
    created_dt: datetime
    last_updated_dt: Optional[datetime] = None
