from pydantic import BaseModel
from datetime import datetime


class FavoriteResponse(BaseModel):
    id: str
    user_id: str
    listing_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class FavoriteToggleResponse(BaseModel):
    listing_id: str
    saved: bool
