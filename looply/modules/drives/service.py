from supabase import Client
from looply.modules.drives.schemas import DriveCreate, DriveUpdate, DriveResponse
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

DRIVE_SELECT = "*, ngo:users!ngo_drives_ngo_id_fkey(id, name, email, role)"


class DriveService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_row(self, drive_id: str) -> Dict[str, Any]:
        result = self.supabase.table("ngo_drives")\
            .select(DRIVE_SELECT)\
            .eq("id", drive_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Drive not found")
        return result.data[0]

    def get_drive(self, drive_id: str) -> DriveResponse:
        try:
            return DriveResponse(**self._get_row(drive_id))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def check_drive_owner(self, drive_id: str, ngo_id: str) -> Dict[str, Any]:
        drive = self._get_row(drive_id)
        if drive["ngo_id"] != ngo_id:
            raise HTTPException(status_code=403, detail="Only the NGO running this drive can manage it")
        return drive

    def list_drives(
        self,
        priority: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[DriveResponse]:
        """Active drives, newest first"""
        try:
            query = self.supabase.table("ngo_drives")\
                .select(DRIVE_SELECT)\
                .eq("status", "active")
            if priority:
                query = query.eq("priority", priority)
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [DriveResponse(**drive) for drive in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_ngo_drives(self, ngo_id: str) -> List[DriveResponse]:
        """Every drive an NGO runs, any status"""
        try:
            result = self.supabase.table("ngo_drives")\
                .select(DRIVE_SELECT)\
                .eq("ngo_id", ngo_id)\
                .order("created_at", desc=True)\
                .execute()
            return [DriveResponse(**drive) for drive in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_drive(self, drive_data: DriveCreate, ngo_id: str) -> DriveResponse:
        """Create a new donation drive"""
        try:
            result = self.supabase.table("ngo_drives").insert({
                "ngo_id": ngo_id,
                "title": drive_data.title,
                "description": drive_data.description,
                "priority": drive_data.priority,
                "deadline": drive_data.deadline.isoformat() if drive_data.deadline else None,
                "progress": 0,
                "status": "active"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create drive")

            logger.info(f"NGO {ngo_id} started drive {result.data[0]['id']}")
            return self.get_drive(result.data[0]["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_drive(self, drive_id: str, drive_data: DriveUpdate) -> DriveResponse:
        """Update drive details or progress; reaching 100% completes the drive"""
        try:
            update_data = drive_data.model_dump(exclude_unset=True)
            if "deadline" in update_data and update_data["deadline"] is not None:
                update_data["deadline"] = update_data["deadline"].isoformat()
            if update_data.get("progress") == 100:
                update_data["status"] = "completed"
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("ngo_drives")\
                .update(update_data)\
                .eq("id", drive_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Drive not found")

            if update_data.get("status") == "completed":
                logger.info(f"Drive {drive_id} completed")
            return self.get_drive(drive_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
