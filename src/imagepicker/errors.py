"""Error taxonomy for the image store and its adapter."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes."""

    DECODE_ERROR = "DECODE_ERROR"
    ENCODE_ERROR = "ENCODE_ERROR"
    WRITE_ERROR = "WRITE_ERROR"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    INVALID_IMAGE = "INVALID_IMAGE"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"


class ErrorResponse(BaseModel):
    """Error response."""

    error: ErrorCode
    message: str
    details: dict | None = None


class ImageStoreError(Exception):
    """Base exception."""

    def __init__(self, code: ErrorCode, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.code, message=self.message, details=self.details)


class DecodeError(ImageStoreError):
    def __init__(self, path: Path | None, reason: str):
        super().__init__(
            ErrorCode.DECODE_ERROR,
            f"Could not decode image records: {reason}",
            {"path": str(path) if path is not None else None},
        )


class EncodeError(ImageStoreError):
    def __init__(self, reason: str):
        super().__init__(
            ErrorCode.ENCODE_ERROR,
            f"Could not encode image records: {reason}",
        )


class WriteError(ImageStoreError):
    def __init__(self, path: Path, error: str):
        super().__init__(
            ErrorCode.WRITE_ERROR,
            f"Failed to write '{path}': {error}",
            {"path": str(path)},
        )


class RecordIndexError(ImageStoreError, IndexError):
    def __init__(self, position: int, size: int):
        super().__init__(
            ErrorCode.INDEX_OUT_OF_RANGE,
            f"Position {position} is out of range for {size} record(s)",
            {"position": position, "size": size},
        )


class InvalidImageError(ImageStoreError):
    def __init__(self, reason: str):
        super().__init__(
            ErrorCode.INVALID_IMAGE,
            f"Payload is not a readable image: {reason}",
        )


class PayloadTooLargeError(ImageStoreError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            ErrorCode.PAYLOAD_TOO_LARGE,
            f"Image payload of {size} bytes is outside the accepted range (1..{limit})",
            {"size": size, "limit": limit},
        )
