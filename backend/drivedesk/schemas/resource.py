# backend/drivedesk/schemas/resource.py
from typing import Optional

from pydantic import Field, HttpUrl

from ._strict_base import StrictRequestModel
from .base import StandardizedModel


class ResourceCreate(StrictRequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    resource_url: HttpUrl
    image_url: Optional[HttpUrl] = None
    details: Optional[str] = Field(None, max_length=5000)


class ResourceUpdate(StrictRequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    resource_url: Optional[HttpUrl] = None
    image_url: Optional[HttpUrl] = None
    details: Optional[str] = Field(None, max_length=5000)


class ResourceResponse(StandardizedModel):
    id: str
    name: str
    resource_url: str
    image_url: Optional[str] = None
    details: Optional[str] = None
