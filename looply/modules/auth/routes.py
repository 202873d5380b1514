from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    SessionResponse, MeResponse
)
from looply.modules.auth.service import AuthService
from looply.core.dependencies import (
    get_auth_service, get_current_token, get_optional_token, get_current_user_id,
    get_user_profile
)
from looply.config.roles_config import ROLE_CAPABILITIES
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user or NGO"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token plus profile"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/session", response_model=SessionResponse)
async def get_session(
    token: Optional[str] = Depends(get_optional_token),
    service: AuthService = Depends(get_auth_service)
):
    """Current session: the signed-in profile and authenticated flag (anonymous callers get an empty session)"""
    return service.get_session(token)


@router.get("/me", response_model=MeResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
):
    """Get current authenticated user, their profile and role capabilities (for frontend UI)."""
    profile = get_user_profile(current_user["id"], supabase)
    role = (profile or {}).get("role") or current_user.get("user_metadata", {}).get("role", "user")
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        user_metadata=current_user.get("user_metadata") or {},
        profile=profile,
        capabilities=ROLE_CAPABILITIES.get(role, [])
    )
