"""Local filesystem storage for uploaded report files."""

import os
import tempfile
import uuid
from pathlib import Path
from typing import Optional
from uuid import UUID

from report_tracker.exceptions import StorageError
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)


class LocalArtifactStore:
    """
    Stores report artifacts as flat files under a base directory.

    File names are ``<owner_id>_<uuid4><ext>``. The random token is what
    keeps concurrent uploads from colliding, so no locking is needed.

    All methods are blocking; async callers run them in an executor.
    """

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def ensure_base_dir(self) -> None:
        """Create the base directory if it does not exist."""
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create upload directory: {e}", str(self.base_dir))

    def build_location(self, owner_id: UUID, original_filename: Optional[str]) -> Path:
        """Derive a fresh, unique location for an upload by owner_id."""
        extension = Path(original_filename).suffix if original_filename else ""
        if not extension[1:].isalnum():
            extension = ""
        return self.base_dir / f"{owner_id}_{uuid.uuid4()}{extension}"

    def store(self, owner_id: UUID, content: bytes, original_filename: Optional[str] = None) -> str:
        """
        Persist content and return its location.

        Content is written to a temporary file in the target directory and
        renamed into place, so the returned location never holds a partial
        write.

        Args:
            owner_id: ID of the owning user
            content: File bytes
            original_filename: Client-side file name; only its extension is kept

        Returns:
            Location string for the stored file

        Raises:
            StorageError: If the directory or file cannot be written
        """
        self.ensure_base_dir()
        target = self.build_location(owner_id, original_filename)

        tmp_path: Optional[str] = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.base_dir, prefix=".upload-", suffix=".part")
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, target)
            tmp_path = None
        except OSError as e:
            log.error("artifact_store_failed", owner_id=str(owner_id), error=str(e))
            raise StorageError(f"Failed to store file: {e}", str(target))
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except FileNotFoundError:
                    pass
                except OSError as e:
                    log.warning("artifact_tmp_cleanup_failed", path=tmp_path, error=str(e))

        log.info("artifact_stored", owner_id=str(owner_id), location=str(target), size=len(content))
        return str(target)

    def read(self, location: str) -> bytes:
        """
        Read stored content.

        Raises:
            StorageError: If the file is missing or unreadable
        """
        try:
            return Path(location).read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read file: {e}", location)

    def delete(self, location: str) -> bool:
        """
        Remove the file at location.

        A missing file is not an error.

        Returns:
            True if a file was removed, False if none was present

        Raises:
            StorageError: On any other filesystem failure
        """
        try:
            Path(location).unlink()
        except FileNotFoundError:
            log.debug("artifact_already_absent", location=location)
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}", location)

        log.info("artifact_deleted", location=location)
        return True
