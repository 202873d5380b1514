from fastapi import APIRouter, Depends, Query
from looply.database.supabase_client import get_supabase
from looply.modules.forums.schemas import PostCreate, PostResponse, CommentCreate, CommentResponse
from looply.modules.forums.service import ForumService
from looply.core.dependencies import require_capability
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/forums", tags=["forums"])


def get_forum_service(supabase: Client = Depends(get_supabase)) -> ForumService:
    return ForumService(supabase)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    community: Optional[str] = None,
    q: Optional[str] = Query(None, alias="query"),
    limit: int = 20,
    offset: int = 0,
    service: ForumService = Depends(get_forum_service)
):
    return service.list_posts(community=community, query=q, limit=limit, offset=offset)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    user_data: Dict = Depends(require_capability("forums:create")),
    service: ForumService = Depends(get_forum_service)
):
    return service.create_post(post_data, user_data["id"])


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    service: ForumService = Depends(get_forum_service)
):
    return service.get_post(post_id)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    user_data: Dict = Depends(require_capability("forums:delete")),
    service: ForumService = Depends(get_forum_service)
):
    """Delete a post and its comments (author only)"""
    service.delete_post(post_id, user_data["id"])
    return None


@router.get("/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    post_id: str,
    service: ForumService = Depends(get_forum_service)
):
    return service.list_comments(post_id)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=201)
async def create_comment(
    post_id: str,
    comment_data: CommentCreate,
    user_data: Dict = Depends(require_capability("forums:create")),
    service: ForumService = Depends(get_forum_service)
):
    return service.create_comment(post_id, comment_data, user_data["id"])
