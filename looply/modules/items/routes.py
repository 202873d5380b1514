from fastapi import APIRouter, Depends, UploadFile, File
from looply.database.supabase_client import get_supabase
from looply.modules.items.schemas import (
    ItemCreate, ItemUpdate, ItemStatusUpdate, ItemResponse, SearchFilters,
    FilterOptionsResponse, LikeToggleResponse, ImageUploadResponse
)
from looply.modules.items.filters import (
    search_filters_from_query, CATEGORIES, MODES, CONDITIONS, OWNER_TYPES, SORT_OPTIONS
)
from looply.modules.items.service import ItemService
from looply.modules.swipes.service import SwipeService
from looply.core.dependencies import (
    require_capability, get_current_user_id, get_optional_user, check_listing_owner
)
from looply.config import settings
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/items", tags=["items"])


def get_item_service(supabase: Client = Depends(get_supabase)) -> ItemService:
    return ItemService(supabase)


@router.get("", response_model=List[ItemResponse])
async def list_items(
    limit: int = settings.default_page_size,
    offset: int = 0,
    filters: SearchFilters = Depends(search_filters_from_query),
    service: ItemService = Depends(get_item_service)
):
    """Available listings narrowed by the marketplace filters"""
    return service.list_items(filters, limit=limit, offset=offset)


@router.get("/filters", response_model=FilterOptionsResponse)
async def get_filter_options(
    filters: SearchFilters = Depends(search_filters_from_query)
):
    """Default filters (for reset) plus the option lists of the filter panel"""
    return FilterOptionsResponse(
        defaults=SearchFilters(),
        active_filter_count=filters.active_filter_count,
        modes=MODES,
        conditions=CONDITIONS,
        categories=CATEGORIES,
        owner_types=OWNER_TYPES,
        sort_options=SORT_OPTIONS
    )


@router.get("/mine", response_model=List[ItemResponse])
async def list_my_items(
    status: Optional[str] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: ItemService = Depends(get_item_service)
):
    """The caller's listings in any status"""
    return service.list_user_items(user_data["id"], status=status)


@router.post("", response_model=ItemResponse, status_code=201)
async def create_item(
    item_data: ItemCreate,
    user_data: Dict = Depends(require_capability("listings:create")),
    service: ItemService = Depends(get_item_service)
):
    """Create a new listing"""
    return service.create_item(item_data, user_data["id"])


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: str,
    user_data: Optional[Dict] = Depends(get_optional_user),
    service: ItemService = Depends(get_item_service)
):
    """Item detail page"""
    return service.get_item(item_id, viewer_id=user_data["id"] if user_data else None)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: str,
    item_data: ItemUpdate,
    user_data: Dict = Depends(require_capability("listings:update")),
    service: ItemService = Depends(get_item_service),
    supabase: Client = Depends(get_supabase)
):
    """Update listing (owner only)"""
    check_listing_owner(item_id, user_data, supabase)
    return service.update_item(item_id, item_data)


@router.patch("/{item_id}/status", response_model=ItemResponse)
async def update_item_status(
    item_id: str,
    status_data: ItemStatusUpdate,
    user_data: Dict = Depends(require_capability("listings:update")),
    service: ItemService = Depends(get_item_service),
    supabase: Client = Depends(get_supabase)
):
    """Toggle a listing between available and inactive (owner only)"""
    listing = check_listing_owner(item_id, user_data, supabase)
    return service.update_status(item_id, listing.get("status"), status_data.status)


@router.delete("/{item_id}", status_code=204)
async def delete_item(
    item_id: str,
    user_data: Dict = Depends(require_capability("listings:delete")),
    service: ItemService = Depends(get_item_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete listing (owner only)"""
    check_listing_owner(item_id, user_data, supabase)
    service.delete_item(item_id)
    return None


@router.post("/{item_id}/images", response_model=ImageUploadResponse, status_code=201)
async def upload_item_image(
    item_id: str,
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_capability("listings:update")),
    service: ItemService = Depends(get_item_service),
    supabase: Client = Depends(get_supabase)
):
    """Upload a photo for a listing (owner only)"""
    check_listing_owner(item_id, user_data, supabase)
    return await service.upload_image(item_id, file)


@router.post("/{item_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    item_id: str,
    user_data: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
):
    """Like or unlike a listing"""
    liked = SwipeService(supabase).toggle_like(user_data["id"], item_id)
    return LikeToggleResponse(listing_id=item_id, liked=liked)
