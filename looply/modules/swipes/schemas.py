from pydantic import BaseModel
from typing import List, Literal
from datetime import datetime
from looply.modules.items.schemas import ItemResponse


class SwipeCreate(BaseModel):
    listing_id: str
    action: Literal["like", "pass"]


class SwipeResponse(BaseModel):
    id: str
    user_id: str
    listing_id: str
    action: str
    created_at: datetime

    class Config:
        from_attributes = True


class DeckResponse(BaseModel):
    items: List[ItemResponse]
    remaining: int


class DeckResetResponse(BaseModel):
    cleared: int
