from pydantic import BaseModel, Field
from typing import Optional, Literal, Dict, Any
from datetime import datetime, date

Priority = Literal["high", "medium", "low"]


class DriveCreate(BaseModel):
    title: str = Field(..., min_length=3)
    description: str
    priority: Priority = "medium"
    deadline: Optional[date] = None


class DriveUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3)
    description: Optional[str] = None
    priority: Optional[Priority] = None
    deadline: Optional[date] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[Literal["active", "completed"]] = None


class DriveResponse(BaseModel):
    id: str
    ngo_id: str
    title: str
    description: Optional[str] = None
    priority: str
    progress: int = 0
    status: str
    deadline: Optional[date] = None
    ngo: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
