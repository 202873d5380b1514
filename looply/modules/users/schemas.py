from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str = "user"
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    karma_points: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicUserResponse(BaseModel):
    id: str
    name: Optional[str] = None
    role: str = "user"
    location: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    karma_points: int = 0
    created_at: datetime

    class Config:
        from_attributes = True


class OwnerSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    karma_points: Optional[int] = None


class UserStatsResponse(BaseModel):
    total_listings: int
    available_listings: int
    gift_listings: int
    donations_pledged: int
    karma_points: int
