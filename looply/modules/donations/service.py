from supabase import Client
from looply.modules.donations.schemas import DonationCreate, DonationResponse
from looply.modules.drives.service import DriveService
from looply.modules.users.service import UserService
from looply.config import settings
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

DONATION_SELECT = (
    "*, drive:ngo_drives!donations_ngo_drive_id_fkey("
    "id, title, description, ngo_id, ngo:users!ngo_drives_ngo_id_fkey(name)), "
    "donor:users!donations_user_id_fkey(id, name, email)"
)
DONATION_STATUS_ORDER = ["pledged", "delivered", "received"]


class DonationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.drives = DriveService(supabase)

    def get_donation(self, donation_id: str) -> DonationResponse:
        try:
            result = self.supabase.table("donations")\
                .select(DONATION_SELECT)\
                .eq("id", donation_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Donation not found")
            return DonationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_donation(self, donation_data: DonationCreate, user_id: str) -> DonationResponse:
        """Pledge to an active drive, optionally with one of the donor's listings"""
        try:
            drive = self.drives.get_drive(donation_data.ngo_drive_id)
            if drive.status != "active":
                raise HTTPException(status_code=400, detail="This drive is no longer accepting donations")

            if donation_data.item_id:
                listing = self.supabase.table("listings")\
                    .select("id, user_id")\
                    .eq("id", donation_data.item_id)\
                    .limit(1)\
                    .execute()
                if not listing.data:
                    raise HTTPException(status_code=404, detail="Listing not found")
                if listing.data[0]["user_id"] != user_id:
                    raise HTTPException(status_code=403, detail="You can only donate your own listings")

            result = self.supabase.table("donations").insert({
                "user_id": user_id,
                "ngo_drive_id": donation_data.ngo_drive_id,
                "item_id": donation_data.item_id,
                "status": "pledged"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create donation")

            logger.info(f"Donation pledged by {user_id} to drive {donation_data.ngo_drive_id}")
            return self.get_donation(result.data[0]["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_user_donations(self, user_id: str) -> List[DonationResponse]:
        try:
            result = self.supabase.table("donations")\
                .select(DONATION_SELECT)\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [DonationResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_drive_donations(self, drive_id: str) -> List[DonationResponse]:
        try:
            result = self.supabase.table("donations")\
                .select(DONATION_SELECT)\
                .eq("ngo_drive_id", drive_id)\
                .order("created_at", desc=True)\
                .execute()
            return [DonationResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_donation(self, donation_id: str, status: str, user_id: str) -> DonationResponse:
        """Advance a donation: donor or NGO marks it delivered, only the NGO marks it received"""
        try:
            donation = self.get_donation(donation_id)
            ngo_id = (donation.drive or {}).get("ngo_id")
            if user_id not in (donation.user_id, ngo_id):
                raise HTTPException(status_code=403, detail="Only the donor or the receiving NGO can update this donation")
            if DONATION_STATUS_ORDER.index(status) <= DONATION_STATUS_ORDER.index(donation.status):
                raise HTTPException(
                    status_code=400,
                    detail=f"Cannot move donation from {donation.status} to {status}"
                )
            if status == "received" and user_id != ngo_id:
                raise HTTPException(status_code=403, detail="Only the receiving NGO can confirm receipt")

            result = self.supabase.table("donations")\
                .update({"status": status, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", donation_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Donation not found")

            logger.info(f"Donation {donation_id} moved from {donation.status} to {status}")
            if status == "received":
                UserService(self.supabase).adjust_karma(donation.user_id, settings.karma_donation_received)
            return self.get_donation(donation_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
