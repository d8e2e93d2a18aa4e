"""Image API endpoints."""

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import Response

from ..errors import (
    DecodeError,
    EncodeError,
    ImageStoreError,
    InvalidImageError,
    PayloadTooLargeError,
    RecordIndexError,
    WriteError,
)
from ..models import ImageRecord
from ..services.image_service import CaptureSource, detect_media_type, get_image_service
from .schemas import ErrorResponse, ImageListResponse, ImageResponse

router = APIRouter(prefix="/images", tags=["images"])

_STATUS_BY_ERROR: dict[type[ImageStoreError], int] = {
    RecordIndexError: 404,
    InvalidImageError: 422,
    PayloadTooLargeError: 413,
    EncodeError: 500,
    DecodeError: 500,
    WriteError: 507,
}


def _http_error(exc: ImageStoreError) -> HTTPException:
    """Translate a store error into an HTTP error."""
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    return HTTPException(
        status_code=status_code,
        detail=exc.to_response().model_dump(mode="json"),
    )


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the request body, stopping as soon as it exceeds limit."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(int(declared), limit)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError(len(body), limit)
    return bytes(body)


def _to_response(position: int, record: ImageRecord) -> ImageResponse:
    return ImageResponse(
        position=position,
        created_at=record.created_at,
        size=record.size,
        url=f"/api/images/{position}",
    )


@router.get("", response_model=ImageListResponse)
async def list_images() -> ImageListResponse:
    """List images in store order (newest first by default)."""
    service = get_image_service()
    records = service.list_images()
    return ImageListResponse(
        images=[_to_response(position, record) for position, record in enumerate(records)],
        total=len(records),
    )


@router.post(
    "",
    response_model=ImageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        507: {"model": ErrorResponse},
    },
)
async def create_image(
    request: Request,
    source: CaptureSource = Query(default=CaptureSource.LIBRARY),
) -> ImageResponse:
    """Add a picked image. The request body is the raw encoded image."""
    service = get_image_service()

    try:
        raw = await _read_body(request, service.max_upload_bytes)
        position, record = service.add_image(raw, source)
    except ImageStoreError as exc:
        raise _http_error(exc) from exc

    return _to_response(position, record)


@router.get(
    "/{position}",
    responses={
        200: {"content": {"image/jpeg": {}}, "description": "Image file"},
        404: {"model": ErrorResponse},
    },
)
async def get_image(position: int) -> Response:
    """Get the image bytes at a position."""
    service = get_image_service()

    try:
        record = service.get_image(position)
    except ImageStoreError as exc:
        raise _http_error(exc) from exc

    media_type = detect_media_type(record.payload)
    return Response(content=record.payload, media_type=media_type)


@router.delete(
    "/{position}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 507: {"model": ErrorResponse}},
)
async def delete_image(position: int) -> Response:
    """Delete the image at a position."""
    service = get_image_service()

    try:
        service.delete_image(position)
    except ImageStoreError as exc:
        raise _http_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
