# backend/drivedesk/schemas/support.py
from typing import List, Optional

from pydantic import Field

from ..core.enums import SupportStatus
from ._strict_base import StrictRequestModel
from .base import StandardizedModel, UtcDatetime


class SupportMessageCreate(StrictRequestModel):
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=10000)


class SupportStatusUpdate(StrictRequestModel):
    status: SupportStatus


class SupportReplyCreate(StrictRequestModel):
    body: str = Field(..., min_length=1, max_length=10000)


class SupportReplyResponse(StandardizedModel):
    id: str
    message_id: str
    user_id: str
    is_admin: bool
    body: str
    created_at: Optional[UtcDatetime] = None


class SupportMessageResponse(StandardizedModel):
    id: str
    user_id: str
    subject: str
    message: str
    status: str
    created_at: Optional[UtcDatetime] = None
    replies: List[SupportReplyResponse] = Field(default_factory=list)
