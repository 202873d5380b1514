from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.users.schemas import UserUpdate, UserResponse, PublicUserResponse, UserStatsResponse
from looply.modules.users.service import UserService
from looply.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Get the caller's profile"""
    return service.get_user_by_id(user_data["id"])


@router.put("/me", response_model=UserResponse)
async def update_my_profile(
    user_data_body: UserUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Update the caller's profile (settings page)"""
    return service.update_user(user_data["id"], user_data_body)


@router.get("/me/stats", response_model=UserStatsResponse)
async def get_my_stats(
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    return service.get_stats(user_data["id"])


@router.get("/{user_id}", response_model=PublicUserResponse)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service)
):
    """Public profile of any marketplace member"""
    return service.get_public_profile(user_id)
