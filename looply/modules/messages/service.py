from supabase import Client
from looply.modules.messages.schemas import (
    ThreadCreate, MessageCreate, MessageResponse, ThreadResponse, MarkReadResponse
)
from typing import List, Dict, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

THREAD_SELECT = (
    "*, user_a:users!chat_threads_user_a_id_fkey(id, name, avatar_url), "
    "user_b:users!chat_threads_user_b_id_fkey(id, name, avatar_url), "
    "listing:listings!chat_threads_listing_id_fkey(id, title, images)"
)


class MessageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_thread_row(self, thread_id: str) -> Dict[str, Any]:
        result = self.supabase.table("chat_threads")\
            .select(THREAD_SELECT)\
            .eq("id", thread_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Conversation not found")
        return result.data[0]

    def _check_participant(self, thread_id: str, user_id: str) -> Dict[str, Any]:
        thread = self._get_thread_row(thread_id)
        if user_id not in (thread["user_a_id"], thread["user_b_id"]):
            raise HTTPException(status_code=403, detail="You are not part of this conversation")
        return thread

    def _build_thread(self, thread: Dict[str, Any], messages: List[Dict[str, Any]], user_id: str) -> ThreadResponse:
        # messages arrive newest first
        unread = sum(1 for m in messages if m["sender_id"] != user_id and not m.get("is_read"))
        last_message = MessageResponse(**messages[0]) if messages else None
        return ThreadResponse(**thread, last_message=last_message, unread_count=unread)

    def list_threads(self, user_id: str) -> List[ThreadResponse]:
        """Conversations the user takes part in, most recent activity first"""
        try:
            result = self.supabase.table("chat_threads")\
                .select(THREAD_SELECT)\
                .or_(f"user_a_id.eq.{user_id},user_b_id.eq.{user_id}")\
                .order("updated_at", desc=True)\
                .execute()
            threads = result.data or []
            if not threads:
                return []

            messages = self.supabase.table("messages")\
                .select("*")\
                .in_("thread_id", [t["id"] for t in threads])\
                .order("created_at", desc=True)\
                .execute()

            by_thread: Dict[str, List[Dict[str, Any]]] = {}
            for message in messages.data or []:
                by_thread.setdefault(message["thread_id"], []).append(message)

            return [self._build_thread(t, by_thread.get(t["id"], []), user_id) for t in threads]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def start_thread(self, thread_data: ThreadCreate, user_id: str) -> ThreadResponse:
        """Open a conversation, reusing one that already exists for the same pair and listing"""
        try:
            if thread_data.recipient_id == user_id:
                raise HTTPException(status_code=400, detail="You cannot message yourself")

            recipient = self.supabase.table("users")\
                .select("id")\
                .eq("id", thread_data.recipient_id)\
                .limit(1)\
                .execute()
            if not recipient.data:
                raise HTTPException(status_code=404, detail="Recipient not found")

            existing = self.supabase.table("chat_threads")\
                .select("id, user_a_id, user_b_id, listing_id")\
                .or_(f"user_a_id.eq.{user_id},user_b_id.eq.{user_id}")\
                .execute()
            pair = {user_id, thread_data.recipient_id}
            for thread in existing.data or []:
                if {thread["user_a_id"], thread["user_b_id"]} == pair \
                        and thread.get("listing_id") == thread_data.listing_id:
                    return self.get_thread(thread["id"], user_id)

            now = datetime.now(timezone.utc).isoformat()
            result = self.supabase.table("chat_threads").insert({
                "user_a_id": user_id,
                "user_b_id": thread_data.recipient_id,
                "listing_id": thread_data.listing_id,
                "updated_at": now
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to start conversation")

            logger.info(f"Conversation {result.data[0]['id']} started by {user_id}")
            return self.get_thread(result.data[0]["id"], user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_thread(self, thread_id: str, user_id: str) -> ThreadResponse:
        try:
            thread = self._check_participant(thread_id, user_id)
            messages = self.supabase.table("messages")\
                .select("*")\
                .eq("thread_id", thread_id)\
                .order("created_at", desc=True)\
                .execute()
            return self._build_thread(thread, messages.data or [], user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_messages(self, thread_id: str, user_id: str) -> List[MessageResponse]:
        try:
            self._check_participant(thread_id, user_id)
            result = self.supabase.table("messages")\
                .select("*")\
                .eq("thread_id", thread_id)\
                .order("created_at")\
                .execute()
            return [MessageResponse(**row) for row in result.data or []]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def send_message(self, thread_id: str, message_data: MessageCreate, user_id: str) -> MessageResponse:
        try:
            self._check_participant(thread_id, user_id)
            result = self.supabase.table("messages").insert({
                "thread_id": thread_id,
                "sender_id": user_id,
                "content": message_data.content,
                "type": message_data.type,
                "is_read": False
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send message")

            self.supabase.table("chat_threads")\
                .update({"updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", thread_id)\
                .execute()
            return MessageResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_read(self, thread_id: str, user_id: str) -> MarkReadResponse:
        """Mark the other participant's messages as read"""
        try:
            self._check_participant(thread_id, user_id)
            result = self.supabase.table("messages")\
                .update({"is_read": True})\
                .eq("thread_id", thread_id)\
                .neq("sender_id", user_id)\
                .eq("is_read", False)\
                .execute()
            return MarkReadResponse(thread_id=thread_id, marked=len(result.data or []))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
