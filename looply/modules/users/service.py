from supabase import Client
from looply.modules.users.schemas import UserUpdate, UserResponse, PublicUserResponse, UserStatsResponse
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_row(self, user_id: str) -> dict:
        result = self.supabase.table("users")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        return result.data[0]

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get full user profile by ID"""
        try:
            return UserResponse(**self._get_row(user_id))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_public_profile(self, user_id: str) -> PublicUserResponse:
        """Get the public part of a profile (no email)"""
        try:
            return PublicUserResponse(**self._get_row(user_id))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update user profile"""
        try:
            update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
            if user_data.name is not None:
                update_data["name"] = user_data.name
            if user_data.location is not None:
                update_data["location"] = user_data.location
            if user_data.bio is not None:
                update_data["bio"] = user_data.bio
            if user_data.avatar_url is not None:
                update_data["avatar_url"] = user_data.avatar_url

            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_stats(self, user_id: str) -> UserStatsResponse:
        """Listing and donation counters shown on the profile and my-listings pages"""
        try:
            profile = self._get_row(user_id)
            listings = self.supabase.table("listings")\
                .select("id, status, mode")\
                .eq("user_id", user_id)\
                .execute()
            rows = listings.data or []
            donations = self.supabase.table("donations")\
                .select("id")\
                .eq("user_id", user_id)\
                .execute()
            return UserStatsResponse(
                total_listings=len(rows),
                available_listings=len([r for r in rows if r.get("status") == "available"]),
                gift_listings=len([r for r in rows if r.get("mode") == "gift"]),
                donations_pledged=len(donations.data or []),
                karma_points=profile.get("karma_points") or 0
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def adjust_karma(self, user_id: str, delta: int) -> None:
        """Add delta karma points through the adjust_karma database function"""
        try:
            self.supabase.rpc("adjust_karma", {"_user_id": user_id, "_delta": delta}).execute()
            logger.info(f"Adjusted karma for {user_id} by {delta}")
        except Exception as e:
            logger.error(f"Error adjusting karma for {user_id}: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))
