"""API router registration."""

from fastapi import APIRouter

from . import images

router = APIRouter(prefix="/api")

router.include_router(images.router)
