"""
Pydantic schemas for users and authentication
"""
from pydantic import Field, EmailStr
from typing import Optional
from datetime import datetime

from greengrocer.schemas.common import CamelModel


class UserRegister(CamelModel):
    """Schema for registering a customer account"""
    username: str = Field(..., min_length=1, max_length=100, description="Unique login name")
    password: str = Field(..., min_length=1, description="Plain password, hashed before storage")
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    avatar: Optional[str] = Field(None, max_length=500)


class UserLogin(CamelModel):
    """Schema for logging in"""
    username: str
    password: str


class UserUpdate(CamelModel):
    """Schema for updating a profile (all fields optional)"""
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = Field(None, max_length=500)
    password: Optional[str] = Field(None, min_length=1)


class UserResponse(CamelModel):
    """Public view of a user; never carries the password hash"""
    id: int
    username: str
    full_name: str
    email: str
    role: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
