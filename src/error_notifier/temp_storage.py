"""Temporary attachment storage.

Attachments are written into one shared directory, deleted after a successful
upload when auto-delete is enabled, and otherwise reaped by an age-based sweep.
"""

import logging
import time
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600
DEFAULT_MAX_AGE_HOURS = 24.0


class TempFileStore:
    """Owns the directory that holds transient attachment files."""

    def __init__(self, directory: Path, *, auto_delete: bool = True) -> None:
        self._directory = Path(directory)
        self._auto_delete = auto_delete

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def auto_delete(self) -> bool:
        return self._auto_delete

    def ensure_directory(self) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        return self._directory

    def delete(self, file_path: Path) -> bool:
        """Remove a delivered attachment; never raises."""

        if not self._auto_delete:
            logger.info("File deletion disabled: %s", file_path)
            return False

        try:
            file_path.unlink()
        except FileNotFoundError:
            logger.debug("Attachment already removed: %s", file_path)
            return False
        except OSError as exc:
            logger.warning("Failed to delete file %s: %s", file_path, exc)
            return False

        logger.info("Deleted file: %s", file_path.name)
        return True

    def cleanup_old_files(self, max_age_hours: float = DEFAULT_MAX_AGE_HOURS, *, now: Optional[float] = None) -> int:
        """Remove files older than *max_age_hours*; returns how many were removed."""

        if not self._directory.exists():
            return 0

        current_time = time.time() if now is None else now
        max_age_seconds = max_age_hours * _SECONDS_PER_HOUR
        removed = 0

        try:
            entries = list(self._directory.iterdir())
        except OSError as exc:
            logger.warning("Unable to list temp directory %s: %s", self._directory, exc)
            return 0

        for entry in entries:
            try:
                if not entry.is_file():
                    continue
                if current_time - entry.stat().st_mtime <= max_age_seconds:
                    continue
                entry.unlink()
            except OSError as exc:
                logger.debug("Skipping %s during cleanup: %s", entry, exc)
                continue
            removed += 1
            logger.info("Cleaned up old file: %s", entry.name)

        return removed

    def purge(self) -> int:
        """Remove every file in the directory regardless of age."""

        if self._directory.exists():
            logger.info("Cleaning up temp files in %s", self._directory)
        return self.cleanup_old_files(max_age_hours=0, now=time.time() + 1)
