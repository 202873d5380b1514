from supabase import Client
from looply.modules.favorites.schemas import FavoriteResponse
from looply.modules.items.schemas import ItemResponse
from looply.modules.items.service import ItemService
from typing import List, Optional, Dict, Any
from fastapi import HTTPException


class FavoriteService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_existing(self, user_id: str, listing_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("favorites")\
            .select("*")\
            .eq("user_id", user_id)\
            .eq("listing_id", listing_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def list_favorite_ids(self, user_id: str) -> List[str]:
        """Listing ids the user saved, most recent first"""
        try:
            result = self.supabase.table("favorites")\
                .select("listing_id, created_at")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [f["listing_id"] for f in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_favorite_items(self, user_id: str) -> List[ItemResponse]:
        return ItemService(self.supabase).get_items_by_ids(self.list_favorite_ids(user_id))

    def add_favorite(self, user_id: str, listing_id: str) -> FavoriteResponse:
        """Save a listing; saving twice returns the existing favorite"""
        try:
            ItemService(self.supabase)._get_row(listing_id)
            existing = self._get_existing(user_id, listing_id)
            if existing:
                return FavoriteResponse(**existing)
            result = self.supabase.table("favorites").insert({
                "user_id": user_id,
                "listing_id": listing_id
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add favorite")
            return FavoriteResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove_favorite(self, user_id: str, listing_id: str) -> bool:
        try:
            result = self.supabase.table("favorites")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("listing_id", listing_id)\
                .execute()
            return len(result.data) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_favorite(self, user_id: str, listing_id: str) -> bool:
        """Flip the saved state; returns the new state"""
        try:
            if self._get_existing(user_id, listing_id):
                self.remove_favorite(user_id, listing_id)
                return False
            self.add_favorite(user_id, listing_id)
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
