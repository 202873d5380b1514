from supabase import Client
from looply.modules.swipes.schemas import SwipeResponse, DeckResponse
from looply.modules.items.schemas import ItemResponse, SearchFilters
from looply.modules.items.service import ItemService
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

# gesture -> stored swipe_action
SWIPE_ACTIONS = {"like": "like", "pass": "reject"}


class SwipeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.items = ItemService(supabase)

    def _get_existing(self, user_id: str, listing_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("swipes")\
            .select("*")\
            .eq("user_id", user_id)\
            .eq("listing_id", listing_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def _save(self, user_id: str, listing_id: str, action: str) -> Dict[str, Any]:
        existing = self._get_existing(user_id, listing_id)
        if existing:
            if existing["action"] == action:
                return existing
            result = self.supabase.table("swipes")\
                .update({"action": action})\
                .eq("id", existing["id"])\
                .execute()
        else:
            result = self.supabase.table("swipes").insert({
                "user_id": user_id,
                "listing_id": listing_id,
                "action": action
            }).execute()
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to record swipe")
        return result.data[0]

    def record_swipe(self, user_id: str, listing_id: str, gesture: str) -> SwipeResponse:
        """Record a like or pass; swiping the same listing again replaces the earlier action"""
        try:
            listing = self.items._get_row(listing_id)
            if listing["user_id"] == user_id:
                raise HTTPException(status_code=400, detail="You cannot swipe on your own listing")
            row = self._save(user_id, listing_id, SWIPE_ACTIONS[gesture])
            return SwipeResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_like(self, user_id: str, listing_id: str) -> bool:
        """Flip the liked state of a listing; returns the new state"""
        try:
            self.items._get_row(listing_id)
            existing = self._get_existing(user_id, listing_id)
            if existing and existing["action"] == "like":
                self.supabase.table("swipes")\
                    .delete()\
                    .eq("id", existing["id"])\
                    .execute()
                return False
            self._save(user_id, listing_id, "like")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_swipes(self, user_id: str, action: Optional[str] = None) -> List[SwipeResponse]:
        try:
            query = self.supabase.table("swipes")\
                .select("*")\
                .eq("user_id", user_id)
            if action:
                query = query.eq("action", SWIPE_ACTIONS.get(action, action))
            result = query.order("created_at", desc=True).execute()
            return [SwipeResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_liked_items(self, user_id: str) -> List[ItemResponse]:
        """Listings the user liked, most recent like first"""
        likes = self.list_swipes(user_id, action="like")
        return self.items.get_items_by_ids([s.listing_id for s in likes])

    def get_deck(self, user_id: str, filters: Optional[SearchFilters] = None, limit: int = 20) -> DeckResponse:
        """Cards still to swipe: filtered available listings minus own and already-swiped ones"""
        swiped = {s.listing_id for s in self.list_swipes(user_id)}
        rows = [
            row for row in self.items.fetch_available(filters)
            if row["user_id"] != user_id and row["id"] not in swiped
        ]
        return DeckResponse(
            items=[ItemResponse(**row) for row in rows[:limit]],
            remaining=len(rows)
        )

    def reset_deck(self, user_id: str) -> int:
        """Start over: forget every swipe the user made"""
        try:
            result = self.supabase.table("swipes")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
            cleared = len(result.data or [])
            logger.info(f"Cleared {cleared} swipe(s) for {user_id}")
            return cleared
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
