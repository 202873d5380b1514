from pydantic import BaseModel
from typing import Optional, Literal, Dict, Any
from datetime import datetime


class DonationCreate(BaseModel):
    ngo_drive_id: str
    item_id: Optional[str] = None


class DonationStatusUpdate(BaseModel):
    status: Literal["pledged", "delivered", "received"]


class DonationResponse(BaseModel):
    id: str
    user_id: str
    ngo_drive_id: str
    item_id: Optional[str] = None
    status: str
    drive: Optional[Dict[str, Any]] = None
    donor: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
