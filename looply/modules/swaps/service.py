from supabase import Client
from looply.modules.swaps.schemas import SwapOfferCreate, SwapOfferResponse
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

MATCH_SELECT = (
    "*, user_a:users!matches_user_a_id_fkey(id, name, email), "
    "user_b:users!matches_user_b_id_fkey(id, name, email)"
)


class SwapService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_listing(self, listing_id: str) -> Dict[str, Any]:
        result = self.supabase.table("listings")\
            .select("id, user_id, status, mode")\
            .eq("id", listing_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Listing not found")
        return result.data[0]

    def get_swap_offer(self, offer_id: str) -> SwapOfferResponse:
        try:
            result = self.supabase.table("matches")\
                .select(MATCH_SELECT)\
                .eq("id", offer_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Swap offer not found")
            return SwapOfferResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_swap_offers(self, user_id: str, status: Optional[str] = None) -> List[SwapOfferResponse]:
        """Offers the user sent or received"""
        try:
            query = self.supabase.table("matches")\
                .select(MATCH_SELECT)\
                .or_(f"user_a_id.eq.{user_id},user_b_id.eq.{user_id}")
            if status:
                query = query.eq("status", status)
            result = query.order("created_at", desc=True).execute()
            return [SwapOfferResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_swap_offer(self, offer_data: SwapOfferCreate, user_id: str) -> SwapOfferResponse:
        """Offer one of the caller's listings in exchange for another user's listing"""
        try:
            item_a = self._get_listing(offer_data.item_a_id)
            item_b = self._get_listing(offer_data.item_b_id)

            if item_a["user_id"] != user_id:
                raise HTTPException(status_code=403, detail="You can only offer your own listings")
            if item_b["user_id"] == user_id:
                raise HTTPException(status_code=400, detail="You cannot swap with yourself")
            if item_a["status"] != "available" or item_b["status"] != "available":
                raise HTTPException(status_code=400, detail="Both listings must be available")

            result = self.supabase.table("matches").insert({
                "user_a_id": user_id,
                "user_b_id": item_b["user_id"],
                "item_a_id": item_a["id"],
                "item_b_id": item_b["id"],
                "message": offer_data.message,
                "status": "pending"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create swap offer")

            logger.info(f"Swap offer {result.data[0]['id']} created: {item_a['id']} <-> {item_b['id']}")
            return self.get_swap_offer(result.data[0]["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_swap_offer(self, offer_id: str, status: str, user_id: str) -> SwapOfferResponse:
        """Accept (receiver only) or cancel (either side) a pending offer"""
        try:
            offer = self.get_swap_offer(offer_id)
            if user_id not in (offer.user_a_id, offer.user_b_id):
                raise HTTPException(status_code=403, detail="Only swap participants can update this offer")
            if offer.status != "pending":
                raise HTTPException(status_code=400, detail=f"Swap offer is already {offer.status}")
            if status == "matched" and user_id != offer.user_b_id:
                raise HTTPException(status_code=403, detail="Only the receiving user can accept a swap offer")

            result = self.supabase.table("matches")\
                .update({"status": status, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", offer_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Swap offer not found")

            logger.info(f"Swap offer {offer_id} moved to {status} by {user_id}")
            return self.get_swap_offer(offer_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
