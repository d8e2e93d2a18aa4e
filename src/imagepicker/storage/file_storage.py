"""File system operations for the record file."""

import os
from pathlib import Path


class FileStorage:
    """File storage operations rooted at a data directory."""

    def __init__(self, data_dir: Path) -> None:
        """
        Initialize file storage.

        Args:
            data_dir: Directory that holds the store's files.
        """
        self.data_dir = Path(data_dir)

    def ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def resolve(self, filename: str) -> Path:
        """Get the path of a file inside the data directory."""
        return self.data_dir / filename

    def read_bytes(self, path: Path) -> bytes | None:
        """Read file bytes, or None when the file does not exist."""
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def write_atomic(self, path: Path, data: bytes) -> None:
        """
        Replace the contents of a file in one step.

        The data goes to a sibling temp file first and is then renamed over
        the target, so readers see either the old or the new contents.

        Raises:
            OSError: If the directory cannot be created, the temp file cannot
                be written, or the rename fails. The target is untouched.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with tmp_path.open("wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            tmp_path.replace(path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
