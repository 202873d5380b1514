from supabase import Client
from looply.modules.forums.schemas import PostCreate, PostResponse, CommentCreate, CommentResponse
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

POST_SELECT = "*, author:users!forums_user_id_fkey(id, name, email, role)"
COMMENT_SELECT = "*, author:users!comments_user_id_fkey(id, name, email, role)"


class ForumService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_row(self, post_id: str) -> Dict[str, Any]:
        result = self.supabase.table("forums")\
            .select(POST_SELECT)\
            .eq("id", post_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Post not found")
        return result.data[0]

    def _comment_counts(self, post_ids: List[str]) -> Dict[str, int]:
        if not post_ids:
            return {}
        result = self.supabase.table("comments")\
            .select("forum_id")\
            .in_("forum_id", post_ids)\
            .execute()
        counts: Dict[str, int] = {}
        for row in result.data or []:
            counts[row["forum_id"]] = counts.get(row["forum_id"], 0) + 1
        return counts

    def list_posts(
        self,
        community: Optional[str] = None,
        query: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[PostResponse]:
        """Newest posts first, optionally narrowed to a community or a search term"""
        try:
            builder = self.supabase.table("forums").select(POST_SELECT)
            if community:
                builder = builder.eq("community", community)
            result = builder.order("created_at", desc=True).execute()

            posts = result.data or []
            needle = (query or "").strip().lower()
            if needle:
                # case-insensitive substring of title or content
                posts = [
                    post for post in posts
                    if needle in (post.get("title") or "").lower()
                    or needle in (post.get("content") or "").lower()
                ]
            posts = posts[offset:offset + limit]
            counts = self._comment_counts([post["id"] for post in posts])
            return [
                PostResponse(**post, comment_count=counts.get(post["id"], 0))
                for post in posts
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_post(self, post_id: str) -> PostResponse:
        try:
            post = self._get_row(post_id)
            counts = self._comment_counts([post_id])
            return PostResponse(**post, comment_count=counts.get(post_id, 0))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_post(self, post_data: PostCreate, user_id: str) -> PostResponse:
        try:
            result = self.supabase.table("forums").insert({
                "user_id": user_id,
                "title": post_data.title,
                "content": post_data.content,
                "community": post_data.community
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create post")

            logger.info(f"User {user_id} created forum post {result.data[0]['id']}")
            return self.get_post(result.data[0]["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_post(self, post_id: str, user_id: str) -> bool:
        """Delete a post and its comments (author only)"""
        try:
            post = self._get_row(post_id)
            if post["user_id"] != user_id:
                raise HTTPException(status_code=403, detail="Only the author can delete this post")

            self.supabase.table("comments").delete().eq("forum_id", post_id).execute()
            result = self.supabase.table("forums").delete().eq("id", post_id).execute()
            logger.info(f"Forum post {post_id} deleted by {user_id}")
            return len(result.data) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_comments(self, post_id: str) -> List[CommentResponse]:
        """Comments on a post, oldest first"""
        try:
            self._get_row(post_id)
            result = self.supabase.table("comments")\
                .select(COMMENT_SELECT)\
                .eq("forum_id", post_id)\
                .order("created_at")\
                .execute()
            return [CommentResponse(**row) for row in result.data or []]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_comment(self, post_id: str, comment_data: CommentCreate, user_id: str) -> CommentResponse:
        try:
            self._get_row(post_id)
            result = self.supabase.table("comments").insert({
                "forum_id": post_id,
                "user_id": user_id,
                "content": comment_data.content
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add comment")

            comment = self.supabase.table("comments")\
                .select(COMMENT_SELECT)\
                .eq("id", result.data[0]["id"])\
                .limit(1)\
                .execute()
            return CommentResponse(**comment.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
