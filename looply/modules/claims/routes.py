from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.claims.schemas import ClaimCreate, ClaimStatusUpdate, ClaimResponse
from looply.modules.claims.service import ClaimService
from looply.core.dependencies import require_capability, get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/claims", tags=["claims"])


def get_claim_service(supabase: Client = Depends(get_supabase)) -> ClaimService:
    return ClaimService(supabase)


@router.get("", response_model=List[ClaimResponse])
async def list_claims(
    user_data: Dict = Depends(require_capability("claims:read")),
    service: ClaimService = Depends(get_claim_service)
):
    """Claims made by the calling NGO (NGO dashboard)"""
    return service.list_claims(user_data["id"])


@router.post("", response_model=ClaimResponse, status_code=201)
async def create_claim(
    claim_data: ClaimCreate,
    user_data: Dict = Depends(require_capability("claims:create")),
    service: ClaimService = Depends(get_claim_service)
):
    """Claim a gifted listing (NGO only)"""
    return service.create_claim(claim_data, user_data["id"])


@router.get("/{claim_id}", response_model=ClaimResponse)
async def get_claim(
    claim_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ClaimService = Depends(get_claim_service)
):
    return service.get_claim(claim_id)


@router.patch("/{claim_id}", response_model=ClaimResponse)
async def update_claim(
    claim_id: str,
    status_data: ClaimStatusUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ClaimService = Depends(get_claim_service)
):
    """Advance claim status (claiming NGO or listing owner)"""
    return service.update_claim(claim_id, status_data.status, user_data["id"])


@router.delete("/{claim_id}", status_code=204)
async def cancel_claim(
    claim_id: str,
    user_data: Dict = Depends(require_capability("claims:delete")),
    service: ClaimService = Depends(get_claim_service)
):
    """Withdraw a claim before pickup is arranged"""
    service.cancel_claim(claim_id, user_data["id"])
    return None
