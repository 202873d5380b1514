from supabase import Client
from looply.modules.claims.schemas import ClaimCreate, ClaimResponse
from looply.modules.items.service import ItemService
from looply.modules.users.service import UserService
from looply.config import settings
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

CLAIM_SELECT = "*, listing:listings!claims_listing_id_fkey(id, title, description, images, user_id)"
CLAIM_STATUS_ORDER = ["claimed", "pickup_arranged", "received"]


class ClaimService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.items = ItemService(supabase)

    def get_claim(self, claim_id: str) -> ClaimResponse:
        try:
            result = self.supabase.table("claims")\
                .select(CLAIM_SELECT)\
                .eq("id", claim_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Claim not found")
            return ClaimResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_claims(self, ngo_id: str) -> List[ClaimResponse]:
        """Claims made by an NGO, newest first"""
        try:
            result = self.supabase.table("claims")\
                .select(CLAIM_SELECT)\
                .eq("ngo_id", ngo_id)\
                .order("claimed_at", desc=True)\
                .execute()
            return [ClaimResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_claim(self, claim_data: ClaimCreate, ngo_id: str) -> ClaimResponse:
        """Claim an available gift listing and take it off the marketplace"""
        try:
            listing = self.items._get_row(claim_data.listing_id)
            if listing["user_id"] == ngo_id:
                raise HTTPException(status_code=400, detail="You cannot claim your own listing")
            if listing.get("mode") != "gift":
                raise HTTPException(status_code=400, detail="Only gifted listings can be claimed")
            if listing.get("status") != "available":
                raise HTTPException(status_code=400, detail="Listing is no longer available")

            result = self.supabase.table("claims").insert({
                "ngo_id": ngo_id,
                "listing_id": claim_data.listing_id,
                "status": "claimed"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create claim")

            self.items.set_status(claim_data.listing_id, "claimed")
            logger.info(f"NGO {ngo_id} claimed listing {claim_data.listing_id}")
            return self.get_claim(result.data[0]["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_claim(self, claim_id: str, status: str, user_id: str) -> ClaimResponse:
        """Move a claim forward; the listing owner earns karma once the NGO receives the item"""
        try:
            claim = self.get_claim(claim_id)
            owner_id = (claim.listing or {}).get("user_id")
            if user_id not in (claim.ngo_id, owner_id):
                raise HTTPException(status_code=403, detail="Only the claiming NGO or the listing owner can update this claim")
            if CLAIM_STATUS_ORDER.index(status) <= CLAIM_STATUS_ORDER.index(claim.status):
                raise HTTPException(
                    status_code=400,
                    detail=f"Cannot move claim from {claim.status} to {status}"
                )

            result = self.supabase.table("claims")\
                .update({"status": status, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", claim_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Claim not found")

            logger.info(f"Claim {claim_id} moved from {claim.status} to {status}")
            if status == "received" and owner_id:
                UserService(self.supabase).adjust_karma(owner_id, settings.karma_claim_received)
            return self.get_claim(claim_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def cancel_claim(self, claim_id: str, ngo_id: str) -> bool:
        """Withdraw a claim that has not progressed; the listing becomes available again"""
        try:
            claim = self.get_claim(claim_id)
            if claim.ngo_id != ngo_id:
                raise HTTPException(status_code=403, detail="Only the claiming NGO can cancel this claim")
            if claim.status != "claimed":
                raise HTTPException(status_code=400, detail=f"Claim is already {claim.status}")

            result = self.supabase.table("claims")\
                .delete()\
                .eq("id", claim_id)\
                .execute()
            self.items.set_status(claim.listing_id, "available")
            logger.info(f"Claim {claim_id} cancelled by {ngo_id}")
            return len(result.data) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
