from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.favorites.schemas import FavoriteResponse, FavoriteToggleResponse
from looply.modules.favorites.service import FavoriteService
from looply.modules.items.schemas import ItemResponse
from looply.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/favorites", tags=["favorites"])


def get_favorite_service(supabase: Client = Depends(get_supabase)) -> FavoriteService:
    return FavoriteService(supabase)


@router.get("", response_model=List[str])
async def list_favorites(
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Saved listing ids"""
    return service.list_favorite_ids(user_data["id"])


@router.get("/items", response_model=List[ItemResponse])
async def list_favorite_items(
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Saved listings (saved-items page)"""
    return service.list_favorite_items(user_data["id"])


@router.post("/{listing_id}", response_model=FavoriteResponse, status_code=201)
async def add_favorite(
    listing_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    return service.add_favorite(user_data["id"], listing_id)


@router.delete("/{listing_id}", status_code=204)
async def remove_favorite(
    listing_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    service.remove_favorite(user_data["id"], listing_id)
    return None


@router.post("/{listing_id}/toggle", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    listing_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Save or unsave a listing"""
    saved = service.toggle_favorite(user_data["id"], listing_id)
    return FavoriteToggleResponse(listing_id=listing_id, saved=saved)
