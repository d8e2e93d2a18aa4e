"""Image intake service sitting between the API and the record store."""

import io
from enum import Enum

import structlog
from PIL import Image, UnidentifiedImageError

from ..config import settings
from ..errors import DecodeError, InvalidImageError, PayloadTooLargeError, RecordIndexError
from ..models import ImageRecord
from ..storage import RecordStore

logger = structlog.get_logger(__name__)

OCTET_STREAM = "application/octet-stream"


class CaptureSource(str, Enum):
    """Where a picked image came from."""

    CAMERA = "camera"
    LIBRARY = "library"


def normalize_image(raw: bytes, quality: int = 100) -> bytes:
    """
    Re-encode picked image bytes as JPEG.

    Args:
        raw: Encoded image in any format Pillow can read.
        quality: JPEG quality, 1-100.

    Returns:
        JPEG bytes.

    Raises:
        InvalidImageError: If Pillow cannot decode the bytes.
    """
    try:
        with Image.open(io.BytesIO(raw)) as image:
            image.load()
            # JPEG has no alpha or palette modes
            if image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            buffer = io.BytesIO()
            image.save(buffer, format="JPEG", quality=quality)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise InvalidImageError(str(exc)) from exc
    return buffer.getvalue()


def detect_media_type(payload: bytes) -> str:
    """Guess the MIME type of stored payload bytes."""
    try:
        with Image.open(io.BytesIO(payload)) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError):
        return OCTET_STREAM
    return Image.MIME.get(image_format or "", OCTET_STREAM)


class ImageService:
    """Image intake business service."""

    def __init__(
        self,
        store: RecordStore | None = None,
        *,
        normalize_jpeg: bool | None = None,
        jpeg_quality: int | None = None,
        max_upload_bytes: int | None = None,
    ) -> None:
        """
        Initialize image service.

        Args:
            store: Record store; built from settings when omitted.
            normalize_jpeg: Re-encode uploads as JPEG (settings default).
            jpeg_quality: JPEG quality for re-encoding (settings default).
            max_upload_bytes: Largest accepted upload (settings default).
        """
        if store is None:
            store = RecordStore(settings.store_path, policy=settings.insertion_policy)
        self.store = store
        self.normalize_jpeg = (
            settings.normalize_jpeg if normalize_jpeg is None else normalize_jpeg
        )
        self.jpeg_quality = settings.jpeg_quality if jpeg_quality is None else jpeg_quality
        self.max_upload_bytes = (
            settings.max_upload_bytes if max_upload_bytes is None else max_upload_bytes
        )
        self.load_error: DecodeError | None = None

    def startup(self) -> list[ImageRecord]:
        """
        Load persisted records once at application start.

        A corrupt store file is logged and treated as empty so the
        application still comes up. The file itself is left alone until
        the next successful mutation overwrites it.
        """
        self.store.file_storage.ensure_directories()
        try:
            records = self.store.load()
        except DecodeError as exc:
            self.load_error = exc
            logger.warning(
                "store_load_failed",
                path=str(self.store.path),
                error=exc.message,
            )
            return []
        self.load_error = None
        return records

    def add_image(
        self,
        raw: bytes,
        source: CaptureSource = CaptureSource.LIBRARY,
    ) -> tuple[int, ImageRecord]:
        """
        Store a newly picked image.

        Args:
            raw: Encoded image bytes from the capture source.
            source: Camera or photo library.

        Returns:
            Position of the new record and the record itself.

        Raises:
            PayloadTooLargeError: If the body is empty or above the limit.
            InvalidImageError: If normalization is on and the bytes are not an image.
            EncodeError, WriteError: Propagated from the store.
        """
        if not raw or len(raw) > self.max_upload_bytes:
            raise PayloadTooLargeError(len(raw), self.max_upload_bytes)

        payload = normalize_image(raw, self.jpeg_quality) if self.normalize_jpeg else bytes(raw)
        record = ImageRecord(payload=payload)
        position = self.store.create(record)
        logger.info(
            "image_added",
            source=source.value,
            position=position,
            received=len(raw),
            stored=record.size,
        )
        return position, record

    def list_images(self) -> list[ImageRecord]:
        """List records in store order."""
        return list(self.store.records)

    def get_image(self, position: int) -> ImageRecord:
        """
        Get the record at a position.

        Raises:
            RecordIndexError: If position is out of range.
        """
        records = self.store.records
        if not 0 <= position < len(records):
            raise RecordIndexError(position, len(records))
        return records[position]

    def delete_image(self, position: int) -> ImageRecord:
        """Delete the record at a position."""
        return self.store.delete(position)


# Global instance
_image_service: ImageService | None = None


def get_image_service() -> ImageService:
    """Get or create the image service instance."""
    global _image_service
    if _image_service is None:
        _image_service = ImageService()
    return _image_service
