from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    text: str = Field(..., min_length=1)

    model_config = ConfigDict(str_strip_whitespace=True)


class Post(BaseModel):
    """Post model returned to client"""
    id: str
    author_id: str
    text: str
    picture_path: Optional[str] = None
    picture_original_name: Optional[str] = None
    likes: List[str] = []
    comments: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
