from pydantic import BaseModel, Field
from typing import Optional, Literal, Dict, Any
from datetime import datetime


class ThreadCreate(BaseModel):
    recipient_id: str
    listing_id: Optional[str] = None


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=4000)
    type: Literal["text", "image", "system"] = "text"


class MessageResponse(BaseModel):
    id: str
    thread_id: str
    sender_id: str
    content: str
    type: str = "text"
    is_read: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class ThreadResponse(BaseModel):
    id: str
    user_a_id: str
    user_b_id: str
    listing_id: Optional[str] = None
    user_a: Optional[Dict[str, Any]] = None
    user_b: Optional[Dict[str, Any]] = None
    listing: Optional[Dict[str, Any]] = None
    last_message: Optional[MessageResponse] = None
    unread_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MarkReadResponse(BaseModel):
    thread_id: str
    marked: int
