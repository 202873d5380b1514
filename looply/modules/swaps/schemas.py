from pydantic import BaseModel
from typing import Optional, Literal, Dict, Any
from datetime import datetime


class SwapOfferCreate(BaseModel):
    item_a_id: str  # caller's listing
    item_b_id: str  # listing wanted in exchange
    message: Optional[str] = None


class SwapOfferStatusUpdate(BaseModel):
    status: Literal["matched", "cancelled"]


class SwapOfferResponse(BaseModel):
    id: str
    user_a_id: str
    user_b_id: str
    item_a_id: str
    item_b_id: str
    status: str
    message: Optional[str] = None
    user_a: Optional[Dict[str, Any]] = None
    user_b: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
