"""Service layer."""

from .image_service import CaptureSource, ImageService, get_image_service

__all__ = ["CaptureSource", "ImageService", "get_image_service"]
