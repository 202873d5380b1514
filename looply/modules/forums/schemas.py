from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime


class PostCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    content: str = Field(..., min_length=1)
    community: Optional[str] = Field(None, max_length=100)


class PostResponse(BaseModel):
    id: str
    user_id: str
    title: str
    content: str
    community: Optional[str] = None
    author: Optional[Dict[str, Any]] = None
    comment_count: int = 0
    created_at: datetime

    class Config:
        from_attributes = True


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: str
    forum_id: str
    user_id: str
    content: str
    author: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True
