"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from looply.config.roles_config import ROLE_CAPABILITIES
from looply.database.supabase_client import get_supabase, get_service_supabase
from looply.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for the caller's profile row."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Client = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, admin_client)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_optional_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security)
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_optional_user(
    token: Optional[str] = Depends(get_optional_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[dict]:
    """Current user when a valid bearer token is present, otherwise None (public browsing)."""
    if not token:
        return None
    try:
        return auth_service.get_current_user(token)
    except HTTPException:
        return None


def get_user_profile(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    """Return the public.users row for user_id. Uses request-scoped cache when provided."""
    if cache is not None and "profile" in cache:
        return cache["profile"]
    try:
        result = supabase.table("users")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        profile = result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Error getting user profile: {e}")
        profile = None
    if cache is not None:
        cache["profile"] = profile
    return profile


def get_user_role(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> str:
    """Role from the profile row, falling back to the role recorded at sign up."""
    profile = get_user_profile(user_data["id"], supabase, cache)
    if profile and profile.get("role"):
        return profile["role"]
    return (user_data.get("user_metadata") or {}).get("role", "user")


def get_current_profile(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency returning the caller's profile row; 404 when the auth user has no profile."""
    profile = get_user_profile(user_data["id"], supabase, _get_request_cache(request))
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found"
        )
    return profile


def has_capability(role: str, capability: str) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, [])


def require_capability(required_capability: str):
    """Factory function to create a role capability check dependency"""
    def check_capability(
        request: Request,
        user_data: dict = Depends(get_current_user_id),
        supabase: Client = Depends(get_supabase)
    ) -> dict:
        """Dependency to check the caller's role grants the capability"""
        role = get_user_role(user_data, supabase, _get_request_cache(request))
        if not has_capability(role, required_capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Accounts with role '{role}' cannot perform {required_capability}"
            )
        return {**user_data, "role": role}
    return check_capability


def check_listing_owner(listing_id: str, user_data: dict, supabase: Client) -> dict:
    """Return the listing row when the caller owns it; 404 if missing, 403 otherwise"""
    result = supabase.table("listings")\
        .select("id, user_id, status")\
        .eq("id", listing_id)\
        .limit(1)\
        .execute()
    if not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Listing not found"
        )
    listing = result.data[0]
    if listing.get("user_id") != user_data["id"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only modify your own listings"
        )
    return listing
