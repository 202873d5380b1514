from pydantic import BaseModel
from typing import Optional, Literal, Dict, Any
from datetime import datetime


class ClaimCreate(BaseModel):
    listing_id: str


class ClaimStatusUpdate(BaseModel):
    status: Literal["claimed", "pickup_arranged", "received"]


class ClaimResponse(BaseModel):
    id: str
    ngo_id: str
    listing_id: str
    status: str
    listing: Optional[Dict[str, Any]] = None
    claimed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
