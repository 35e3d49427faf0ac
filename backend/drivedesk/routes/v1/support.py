# backend/drivedesk/routes/v1/support.py
"""
Support routes - API v1

Endpoints:
    GET /messages                      - Caller's own tickets, newest first
    POST /messages                     - Raise a ticket
    GET /admin/messages                - Every ticket, open first (admin only)
    GET /messages/{message_id}         - Ticket with its replies
    GET /messages/{message_id}/replies - Replies, oldest first
    POST /messages/{message_id}/replies - Reply to a ticket
    PATCH /messages/{message_id}/status - Move a ticket along (admin only)
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_current_profile, get_support_service, require_admin
from ...models.profile import Profile
from ...schemas.support import (
    SupportMessageCreate,
    SupportMessageResponse,
    SupportReplyCreate,
    SupportReplyResponse,
    SupportStatusUpdate,
)
from ...services.support_service import SupportService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["support-v1"])


@router.get("/messages", response_model=List[SupportMessageResponse])
async def list_own_messages(
    profile: Profile = Depends(get_current_profile),
    support_service: SupportService = Depends(get_support_service),
) -> List[SupportMessageResponse]:
    messages = await asyncio.to_thread(support_service.list_own_messages, profile)
    return [SupportMessageResponse.model_validate(m) for m in messages]


@router.post("/messages", response_model=SupportMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    payload: SupportMessageCreate,
    profile: Profile = Depends(get_current_profile),
    support_service: SupportService = Depends(get_support_service),
) -> SupportMessageResponse:
    message = await asyncio.to_thread(support_service.create_message, profile, payload)
    return SupportMessageResponse.model_validate(message)


@router.get("/admin/messages", response_model=List[SupportMessageResponse])
async def list_all_messages(
    profile: Profile = Depends(require_admin),
    support_service: SupportService = Depends(get_support_service),
) -> List[SupportMessageResponse]:
    messages = await asyncio.to_thread(support_service.list_all_messages, profile)
    return [SupportMessageResponse.model_validate(m) for m in messages]


@router.get("/messages/{message_id}", response_model=SupportMessageResponse)
async def get_message(
    message_id: str,
    profile: Profile = Depends(get_current_profile),
    support_service: SupportService = Depends(get_support_service),
) -> SupportMessageResponse:
    message = await asyncio.to_thread(support_service.get_message, profile, message_id)
    return SupportMessageResponse.model_validate(message)


@router.get("/messages/{message_id}/replies", response_model=List[SupportReplyResponse])
async def list_replies(
    message_id: str,
    profile: Profile = Depends(get_current_profile),
    support_service: SupportService = Depends(get_support_service),
) -> List[SupportReplyResponse]:
    replies = await asyncio.to_thread(support_service.list_replies, profile, message_id)
    return [SupportReplyResponse.model_validate(r) for r in replies]


@router.post(
    "/messages/{message_id}/replies",
    response_model=SupportReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_reply(
    message_id: str,
    payload: SupportReplyCreate,
    profile: Profile = Depends(get_current_profile),
    support_service: SupportService = Depends(get_support_service),
) -> SupportReplyResponse:
    reply = await asyncio.to_thread(support_service.add_reply, profile, message_id, payload)
    return SupportReplyResponse.model_validate(reply)


@router.patch("/messages/{message_id}/status", response_model=SupportMessageResponse)
async def update_status(
    message_id: str,
    payload: SupportStatusUpdate,
    profile: Profile = Depends(get_current_profile),
    support_service: SupportService = Depends(get_support_service),
) -> SupportMessageResponse:
    message = await asyncio.to_thread(
        support_service.update_status, profile, message_id, payload.status
    )
    return SupportMessageResponse.model_validate(message)
