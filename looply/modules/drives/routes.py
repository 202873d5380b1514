from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.drives.schemas import DriveCreate, DriveUpdate, DriveResponse
from looply.modules.drives.service import DriveService
from looply.modules.donations.schemas import DonationResponse
from looply.modules.donations.service import DonationService
from looply.core.dependencies import require_capability
from supabase import Client
from typing import List, Dict, Optional, Literal

router = APIRouter(prefix="/drives", tags=["drives"])


def get_drive_service(supabase: Client = Depends(get_supabase)) -> DriveService:
    return DriveService(supabase)


@router.get("", response_model=List[DriveResponse])
async def list_drives(
    priority: Optional[Literal["high", "medium", "low"]] = None,
    limit: int = 20,
    offset: int = 0,
    service: DriveService = Depends(get_drive_service)
):
    """Active donation drives"""
    return service.list_drives(priority=priority, limit=limit, offset=offset)


@router.get("/mine", response_model=List[DriveResponse])
async def list_my_drives(
    user_data: Dict = Depends(require_capability("drives:create")),
    service: DriveService = Depends(get_drive_service)
):
    """Drives run by the calling NGO (NGO dashboard)"""
    return service.list_ngo_drives(user_data["id"])


@router.post("", response_model=DriveResponse, status_code=201)
async def create_drive(
    drive_data: DriveCreate,
    user_data: Dict = Depends(require_capability("drives:create")),
    service: DriveService = Depends(get_drive_service)
):
    """Start a donation drive (NGO only)"""
    return service.create_drive(drive_data, user_data["id"])


@router.get("/{drive_id}", response_model=DriveResponse)
async def get_drive(
    drive_id: str,
    service: DriveService = Depends(get_drive_service)
):
    return service.get_drive(drive_id)


@router.patch("/{drive_id}", response_model=DriveResponse)
async def update_drive(
    drive_id: str,
    drive_data: DriveUpdate,
    user_data: Dict = Depends(require_capability("drives:update")),
    service: DriveService = Depends(get_drive_service)
):
    """Update a drive or its progress (owning NGO only)"""
    service.check_drive_owner(drive_id, user_data["id"])
    return service.update_drive(drive_id, drive_data)


@router.get("/{drive_id}/donations", response_model=List[DonationResponse])
async def list_drive_donations(
    drive_id: str,
    user_data: Dict = Depends(require_capability("drives:update")),
    service: DriveService = Depends(get_drive_service),
    supabase: Client = Depends(get_supabase)
):
    """Pledges received by a drive (owning NGO only)"""
    service.check_drive_owner(drive_id, user_data["id"])
    return DonationService(supabase).list_drive_donations(drive_id)
