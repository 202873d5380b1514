from supabase import Client
from looply.modules.items.schemas import (
    ItemCreate, ItemUpdate, ItemResponse, SearchFilters, ImageUploadResponse
)
from looply.modules.items.filters import apply_filters, sort_items
from looply.modules.items.storage import get_image_storage
from looply.config import settings
from typing import List, Optional, Dict, Any
from fastapi import HTTPException, UploadFile
from datetime import datetime, timezone
import uuid
import os
import logging

logger = logging.getLogger(__name__)

LISTING_SELECT = "*, users!listings_user_id_fkey(id, name, email, role, karma_points)"


def reshape_listing(row: Dict[str, Any]) -> Dict[str, Any]:
    """Rename the embedded users join to owner"""
    item = dict(row)
    item["owner"] = item.pop("users", None)
    return item


class ItemService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.upload_path = "listings"

    def _get_row(self, item_id: str) -> Dict[str, Any]:
        result = self.supabase.table("listings")\
            .select(LISTING_SELECT)\
            .eq("id", item_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Item not found")
        return reshape_listing(result.data[0])

    def fetch_available(self, filters: Optional[SearchFilters] = None) -> List[Dict[str, Any]]:
        """Available listings with owner joined, narrowed by the filter chain and sorted"""
        try:
            result = self.supabase.table("listings")\
                .select(LISTING_SELECT)\
                .eq("status", "available")\
                .order("created_at", desc=True)\
                .execute()
            rows = [reshape_listing(row) for row in result.data or []]
            rows = apply_filters(rows, filters)
            return sort_items(rows, filters.sort_by if filters else "newest")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_items(
        self,
        filters: Optional[SearchFilters] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[ItemResponse]:
        """Marketplace listing page"""
        rows = self.fetch_available(filters)
        return [ItemResponse(**row) for row in rows[offset:offset + limit]]

    def get_item(self, item_id: str, viewer_id: Optional[str] = None) -> ItemResponse:
        """Get item by ID; counts a view unless the owner is looking"""
        try:
            item = self._get_row(item_id)
            if viewer_id != item["user_id"]:
                views = (item.get("views") or 0) + 1
                self.supabase.table("listings")\
                    .update({"views": views})\
                    .eq("id", item_id)\
                    .execute()
                item["views"] = views
            return ItemResponse(**item)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_items_by_ids(self, item_ids: List[str]) -> List[ItemResponse]:
        """Listings for the given ids, in the given order; ids without a row are skipped"""
        if not item_ids:
            return []
        try:
            result = self.supabase.table("listings")\
                .select(LISTING_SELECT)\
                .in_("id", item_ids)\
                .execute()
            by_id = {row["id"]: reshape_listing(row) for row in result.data or []}
            return [ItemResponse(**by_id[i]) for i in item_ids if i in by_id]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_user_items(self, user_id: str, status: Optional[str] = None) -> List[ItemResponse]:
        """All listings owned by a user (my-listings page), any status unless filtered"""
        try:
            query = self.supabase.table("listings")\
                .select(LISTING_SELECT)\
                .eq("user_id", user_id)
            if status:
                query = query.eq("status", status)
            result = query.order("created_at", desc=True).execute()
            return [ItemResponse(**reshape_listing(row)) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_item(self, item_data: ItemCreate, user_id: str) -> ItemResponse:
        """Create a new listing; new listings start available with no views"""
        try:
            insert_data = item_data.model_dump()
            insert_data.update({
                "user_id": user_id,
                "status": "available",
                "views": 0,
            })
            result = self.supabase.table("listings").insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create item")

            logger.info(f"Listing {result.data[0]['id']} created by {user_id} ({item_data.mode})")
            return self._to_response(result.data[0], user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _to_response(self, row: Dict[str, Any], owner_id: str) -> ItemResponse:
        item = dict(row)
        owner = self.supabase.table("users")\
            .select("id, name, email, role, karma_points")\
            .eq("id", owner_id)\
            .limit(1)\
            .execute()
        item["owner"] = owner.data[0] if owner.data else None
        return ItemResponse(**item)

    def update_item(self, item_id: str, item_data: ItemUpdate) -> ItemResponse:
        """Partial update of a listing"""
        try:
            update_data = item_data.model_dump(exclude_unset=True)
            if update_data.get("mode") is None:
                update_data.pop("mode", None)
            current = self._get_row(item_id)
            mode = update_data.get("mode", current.get("mode"))
            price = update_data.get("price", current.get("price"))
            if mode == "sell" and price is None:
                raise HTTPException(status_code=400, detail="Price is required for items listed for sale")
            # mode rules hold for the merged listing
            if mode != "sell":
                update_data["price"] = None
            if mode != "barter":
                update_data["desired_tags"] = None
                update_data["desired_text"] = None
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("listings")\
                .update(update_data)\
                .eq("id", item_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Item not found")

            return self._to_response(result.data[0], result.data[0]["user_id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_status(self, item_id: str, status: str) -> ItemResponse:
        """Write a listing status (availability toggles and the claims flow)"""
        try:
            result = self.supabase.table("listings")\
                .update({"status": status, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", item_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Item not found")

            logger.info(f"Listing {item_id} status set to {status}")
            return self._to_response(result.data[0], result.data[0]["user_id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, item_id: str, current_status: str, new_status: str) -> ItemResponse:
        """Owner-driven availability change: available <-> inactive"""
        if new_status == "claimed":
            raise HTTPException(status_code=400, detail="Listings are marked claimed by an NGO claim")
        if current_status == "claimed":
            raise HTTPException(status_code=400, detail="Claimed listings cannot change status")
        return self.set_status(item_id, new_status)

    def delete_item(self, item_id: str) -> bool:
        """Delete listing"""
        try:
            result = self.supabase.table("listings")\
                .delete()\
                .eq("id", item_id)\
                .execute()

            return len(result.data) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def upload_image(self, item_id: str, file: UploadFile) -> ImageUploadResponse:
        """Store a listing image (S3 or Supabase Storage) and append its URL to the listing"""
        content_type = file.content_type or ""
        if not content_type.startswith("image/"):
            raise HTTPException(status_code=400, detail="Only image files are accepted")

        file_content = await file.read()
        if len(file_content) > settings.max_image_size_mb * 1024 * 1024:
            raise HTTPException(
                status_code=400,
                detail=f"Images must be smaller than {settings.max_image_size_mb} MB"
            )

        item = self._get_row(item_id)
        file_extension = os.path.splitext(file.filename or "")[1] or ".jpg"
        key = f"{self.upload_path}/{item_id}/{uuid.uuid4().hex}{file_extension}"

        try:
            storage = get_image_storage(self.supabase)
            url = storage.upload_file(file_content, key, content_type=content_type)
            logger.info(f"Uploaded listing image: {key}")
        except Exception as e:
            logger.error(f"Image upload failed: {str(e)}")
            raise HTTPException(status_code=500, detail=f"Failed to upload image: {str(e)}")

        images = list(item.get("images") or []) + [url]
        try:
            self.supabase.table("listings")\
                .update({"images": images})\
                .eq("id", item_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return ImageUploadResponse(listing_id=item_id, url=url, images=images)
