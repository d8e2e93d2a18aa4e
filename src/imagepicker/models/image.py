"""Image domain model."""

from dataclasses import dataclass, field
from datetime import UTC, datetime


def _utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class ImageRecord:
    """One stored image: encoded bytes plus the moment it was picked.

    The payload format is opaque to the store; the adapter normally hands
    over JPEG bytes.
    """

    payload: bytes
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if isinstance(self.payload, (bytearray, memoryview)):
            object.__setattr__(self, "payload", bytes(self.payload))
        # Naive timestamps are taken as UTC, the zone they are persisted in
        if isinstance(self.created_at, datetime) and self.created_at.tzinfo is None:
            object.__setattr__(self, "created_at", self.created_at.replace(tzinfo=UTC))

    @property
    def size(self) -> int:
        """Payload length in bytes."""
        return len(self.payload)
