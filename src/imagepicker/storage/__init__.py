"""Storage layer."""

from .file_storage import FileStorage
from .plist_codec import decode_records, encode_records
from .record_store import RecordStore

__all__ = ["FileStorage", "RecordStore", "decode_records", "encode_records"]
