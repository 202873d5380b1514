from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.swaps.schemas import SwapOfferCreate, SwapOfferStatusUpdate, SwapOfferResponse
from looply.modules.swaps.service import SwapService
from looply.core.dependencies import require_capability
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/swaps", tags=["swaps"])


def get_swap_service(supabase: Client = Depends(get_supabase)) -> SwapService:
    return SwapService(supabase)


@router.get("", response_model=List[SwapOfferResponse])
async def list_swap_offers(
    status: Optional[str] = None,
    user_data: Dict = Depends(require_capability("swaps:read")),
    service: SwapService = Depends(get_swap_service)
):
    """Swap offers the caller sent or received"""
    return service.list_swap_offers(user_data["id"], status=status)


@router.post("", response_model=SwapOfferResponse, status_code=201)
async def create_swap_offer(
    offer_data: SwapOfferCreate,
    user_data: Dict = Depends(require_capability("swaps:create")),
    service: SwapService = Depends(get_swap_service)
):
    """Propose a barter swap"""
    return service.create_swap_offer(offer_data, user_data["id"])


@router.patch("/{offer_id}", response_model=SwapOfferResponse)
async def update_swap_offer(
    offer_id: str,
    status_data: SwapOfferStatusUpdate,
    user_data: Dict = Depends(require_capability("swaps:update")),
    service: SwapService = Depends(get_swap_service)
):
    """Accept or cancel a pending swap offer"""
    return service.update_swap_offer(offer_id, status_data.status, user_data["id"])
