# backend/drivedesk/models/resource.py
"""Links to learning material the instructor shares with students."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Resource(Base):
    __tablename__ = "resources"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)

    name = Column(String(200), nullable=False)
    resource_url = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    details = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
