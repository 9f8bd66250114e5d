from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserBase(BaseModel):
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    location: Optional[str] = None
    occupation: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserCreate(UserBase):
    password: str = Field(..., min_length=5)


class User(BaseModel):
    """User model returned to client"""
    id: str
    first_name: str
    last_name: str
    email: str
    picture_path: Optional[str] = None
    picture_original_name: Optional[str] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    friends: List[str] = []
    viewed_profile: int = 0
    impressions: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
