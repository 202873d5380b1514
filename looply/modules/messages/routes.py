from fastapi import APIRouter, Depends
from looply.database.supabase_client import get_supabase
from looply.modules.messages.schemas import (
    ThreadCreate, MessageCreate, MessageResponse, ThreadResponse, MarkReadResponse
)
from looply.modules.messages.service import MessageService
from looply.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/messages", tags=["messages"])


def get_message_service(supabase: Client = Depends(get_supabase)) -> MessageService:
    return MessageService(supabase)


@router.get("/threads", response_model=List[ThreadResponse])
async def list_threads(
    user_data: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    """Inbox: conversations with last message and unread count"""
    return service.list_threads(user_data["id"])


@router.post("/threads", response_model=ThreadResponse, status_code=201)
async def start_thread(
    thread_data: ThreadCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    return service.start_thread(thread_data, user_data["id"])


@router.get("/threads/{thread_id}", response_model=List[MessageResponse])
async def list_messages(
    thread_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    return service.list_messages(thread_id, user_data["id"])


@router.post("/threads/{thread_id}", response_model=MessageResponse, status_code=201)
async def send_message(
    thread_id: str,
    message_data: MessageCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    return service.send_message(thread_id, message_data, user_data["id"])


@router.post("/threads/{thread_id}/read", response_model=MarkReadResponse)
async def mark_read(
    thread_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    return service.mark_read(thread_id, user_data["id"])
