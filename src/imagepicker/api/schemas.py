"""Pydantic request/response schemas."""

from datetime import datetime

from pydantic import BaseModel

from ..errors import ErrorResponse

__all__ = ["ErrorResponse", "HealthResponse", "ImageListResponse", "ImageResponse"]


class ImageResponse(BaseModel):
    """One entry of the image grid."""

    position: int
    created_at: datetime
    size: int
    url: str


class ImageListResponse(BaseModel):
    """Image grid response, in store order."""

    images: list[ImageResponse]
    total: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    records: int
