"""
User Schemas
Pydantic models for user-related requests and responses
"""

from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime

from src.schemas.base import CamelModel


class User(CamelModel):
    """User row as returned by the store"""
    user_id: int
    user_name: str
    email: str
    role_id: int
    role_name: str
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None
    is_active: bool = True
    created_at: datetime


class UserBase(CamelModel):
    """Base user schema with common fields"""
    user_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role_id: int
    manager_id: Optional[int] = None


class CreateUserRequest(UserBase):
    """Schema for creating a new user"""
    pass


class UpdateUserRequest(UserBase):
    """Schema for updating user information"""
    pass


class UserCreatedResponse(CamelModel):
    user_id: int
