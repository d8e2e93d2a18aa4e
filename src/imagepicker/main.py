"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import router
from .api.schemas import HealthResponse
from .config import settings
from .observability import setup_logging
from .services import get_image_service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup: configure logging and load persisted records
    setup_logging(level=settings.log_level, format=settings.log_format)
    get_image_service().startup()
    yield


app = FastAPI(
    title="ImagePicker API",
    description="Newest-first image picker backed by a property-list store",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(router)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        records=len(get_image_service().store),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "imagepicker.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
