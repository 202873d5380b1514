from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.swipes.schemas import SwipeCreate, SwipeResponse, DeckResponse, DeckResetResponse
from looply.modules.swipes.service import SwipeService
from looply.modules.items.schemas import ItemResponse, SearchFilters
from looply.modules.items.filters import search_filters_from_query
from looply.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict, Optional, Literal

router = APIRouter(prefix="/swipes", tags=["swipes"])


def get_swipe_service(supabase: Client = Depends(get_supabase)) -> SwipeService:
    return SwipeService(supabase)


@router.get("/deck", response_model=DeckResponse)
async def get_deck(
    limit: int = 20,
    filters: SearchFilters = Depends(search_filters_from_query),
    user_data: Dict = Depends(get_current_user_id),
    service: SwipeService = Depends(get_swipe_service)
):
    """Next cards to swipe; the first item is the current card"""
    return service.get_deck(user_data["id"], filters, limit=limit)


@router.post("", response_model=SwipeResponse, status_code=201)
async def record_swipe(
    swipe_data: SwipeCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: SwipeService = Depends(get_swipe_service)
):
    """Like (swipe right) or pass (swipe left) on a listing"""
    return service.record_swipe(user_data["id"], swipe_data.listing_id, swipe_data.action)


@router.get("", response_model=List[SwipeResponse])
async def list_swipes(
    action: Optional[Literal["like", "pass"]] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: SwipeService = Depends(get_swipe_service)
):
    return service.list_swipes(user_data["id"], action=action)


@router.get("/liked", response_model=List[ItemResponse])
async def list_liked_items(
    user_data: Dict = Depends(get_current_user_id),
    service: SwipeService = Depends(get_swipe_service)
):
    """Listings behind the liked-items page"""
    return service.list_liked_items(user_data["id"])


@router.delete("", response_model=DeckResetResponse)
async def reset_deck(
    user_data: Dict = Depends(get_current_user_id),
    service: SwipeService = Depends(get_swipe_service)
):
    """Start over with every available listing"""
    return DeckResetResponse(cleared=service.reset_deck(user_data["id"]))
