"""Pytest configuration and fixtures."""

import io
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from PIL import Image

from imagepicker.models import ImageRecord
from imagepicker.storage import RecordStore

BASE_TIME = datetime(2020, 1, 20, 9, 30, 15, 123456, tzinfo=UTC)


def make_record(payload: bytes, minutes: int = 0) -> ImageRecord:
    """Build a record with a deterministic timestamp."""
    return ImageRecord(payload=payload, created_at=BASE_TIME + timedelta(minutes=minutes))


def encode_image(fmt: str = "PNG", mode: str = "RGB", size: tuple[int, int] = (8, 6)) -> bytes:
    """Encode a tiny solid-colour image."""
    color = (200, 40, 40, 128) if mode == "RGBA" else (200, 40, 40)
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Backing file inside an isolated temp directory."""
    return tmp_path / "images.plist"


@pytest.fixture
def store(store_path: Path) -> RecordStore:
    """Freshly loaded, empty store."""
    record_store = RecordStore(store_path)
    record_store.load()
    return record_store


@pytest.fixture
def png_bytes() -> bytes:
    return encode_image("PNG")


@pytest.fixture
def rgba_png_bytes() -> bytes:
    return encode_image("PNG", mode="RGBA")
