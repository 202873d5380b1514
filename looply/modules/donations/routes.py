from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.donations.schemas import DonationCreate, DonationStatusUpdate, DonationResponse
from looply.modules.donations.service import DonationService
from looply.core.dependencies import require_capability
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/donations", tags=["donations"])


def get_donation_service(supabase: Client = Depends(get_supabase)) -> DonationService:
    return DonationService(supabase)


@router.get("", response_model=List[DonationResponse])
async def list_my_donations(
    user_data: Dict = Depends(require_capability("donations:read")),
    service: DonationService = Depends(get_donation_service)
):
    """Pledges made by the caller"""
    return service.list_user_donations(user_data["id"])


@router.post("", response_model=DonationResponse, status_code=201)
async def create_donation(
    donation_data: DonationCreate,
    user_data: Dict = Depends(require_capability("donations:create")),
    service: DonationService = Depends(get_donation_service)
):
    """Pledge to an NGO drive"""
    return service.create_donation(donation_data, user_data["id"])


@router.patch("/{donation_id}", response_model=DonationResponse)
async def update_donation(
    donation_id: str,
    status_data: DonationStatusUpdate,
    user_data: Dict = Depends(require_capability("donations:update")),
    service: DonationService = Depends(get_donation_service)
):
    """Mark a pledge delivered or received"""
    return service.update_donation(donation_id, status_data.status, user_data["id"])
