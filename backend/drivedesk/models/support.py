# backend/drivedesk/models/support.py
"""Support tickets raised by instructors and the replies threaded under them."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.enums import SupportStatus
from ..database import Base


class SupportMessage(Base):
    __tablename__ = "support_messages"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)

    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=SupportStatus.OPEN.value, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    replies = relationship(
        "SupportReply",
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="SupportReply.created_at",
    )


class SupportReply(Base):
    __tablename__ = "support_replies"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    message_id = Column(
        String(26), ForeignKey("support_messages.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    body = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    message = relationship("SupportMessage", back_populates="replies")
