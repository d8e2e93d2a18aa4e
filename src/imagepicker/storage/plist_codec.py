"""Property-list encoding of the record sequence.

The file holds a top-level array with one dictionary per record::

    [{"imageData": <data>, "date": <date>}, ...]

which is the shape ``PropertyListEncoder`` produces for an array of
``ImageObject(imageData:date:)`` values, so files written on either side can
be read on the other. Binary format keeps sub-second precision on dates; XML
plists are still accepted on read.

Binary plist dates are doubles counted in seconds from 2001-01-01, so
microseconds are exact only within a few centuries of that epoch; far-future
timestamps (around the year 2600 and later) may drift by a few microseconds.
"""

import plistlib
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from xml.parsers.expat import ExpatError

from ..errors import DecodeError, EncodeError
from ..models import ImageRecord

PAYLOAD_KEY = "imageData"
DATE_KEY = "date"


def _to_plist_date(value: datetime) -> datetime:
    # plistlib stores naive datetimes as UTC
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _from_plist_date(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def encode_records(records: Iterable[ImageRecord]) -> bytes:
    """
    Serialize records to binary plist bytes, preserving order.

    Raises:
        EncodeError: If a record carries a non-bytes payload or a non-datetime
            timestamp, or plistlib rejects the value.
    """
    items = []
    for position, record in enumerate(records):
        if not isinstance(record.payload, bytes):
            raise EncodeError(
                f"record {position} payload is {type(record.payload).__name__}, expected bytes"
            )
        if not isinstance(record.created_at, datetime):
            raise EncodeError(
                f"record {position} timestamp is {type(record.created_at).__name__}, "
                "expected datetime"
            )
        items.append(
            {
                PAYLOAD_KEY: record.payload,
                DATE_KEY: _to_plist_date(record.created_at),
            }
        )

    try:
        return plistlib.dumps(items, fmt=plistlib.FMT_BINARY, sort_keys=False)
    except (TypeError, ValueError, OverflowError) as exc:
        raise EncodeError(str(exc)) from exc


def decode_records(data: bytes, path: Path | None = None) -> list[ImageRecord]:
    """
    Parse plist bytes into records.

    Either every entry parses or nothing is returned.

    Args:
        data: Raw file contents.
        path: Source file, used only for error details.

    Raises:
        DecodeError: If the bytes are not a plist of the expected shape.
    """
    try:
        root = plistlib.loads(data)
    except (
        plistlib.InvalidFileException,
        ExpatError,
        ValueError,
        TypeError,
        KeyError,
        IndexError,
    ) as exc:
        # plistlib surfaces truncated binary data as assorted low-level errors
        raise DecodeError(path, f"invalid property list ({exc})") from exc

    if not isinstance(root, list):
        raise DecodeError(path, f"top-level value is {type(root).__name__}, expected array")

    records = []
    for position, item in enumerate(root):
        if not isinstance(item, dict):
            raise DecodeError(path, f"entry {position} is {type(item).__name__}, expected dict")
        payload = item.get(PAYLOAD_KEY)
        created_at = item.get(DATE_KEY)
        if not isinstance(payload, bytes):
            raise DecodeError(path, f"entry {position} has no '{PAYLOAD_KEY}' data")
        if not isinstance(created_at, datetime):
            raise DecodeError(path, f"entry {position} has no '{DATE_KEY}' date")
        records.append(ImageRecord(payload=payload, created_at=_from_plist_date(created_at)))
    return records
