"""
Adapter: Local File Storage

IStorageService on the local filesystem. Files live under ``root_dir`` and
are served by the API under ``/uploads``.
"""

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from src.core.exceptions import StorageError
from src.core.interfaces.storage_service import IStorageService, StorageRef

logger = logging.getLogger(__name__)


class LocalFileStorage(IStorageService):
    """Stores document images on disk (development / single node)."""

    def __init__(self, root_dir: str, public_base_url: str = "", url_prefix: str = "uploads"):
        self._root = Path(root_dir).resolve()
        self._base_url = public_base_url.rstrip("/")
        self._prefix = url_prefix.strip("/")

    def _path(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if self._root not in path.parents:
            raise StorageError(f"Invalid storage key: {key!r}")
        return path

    def upload(self, data: bytes, key: str, content_type: str = "application/octet-stream") -> StorageRef:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write to a temp file first so a crash never leaves a half-written document
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".upload-")
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp, path)
        except OSError as e:
            logger.error(f"Local storage write failed for {key}: {e}")
            raise StorageError(f"Could not store file: {e}") from e

        logger.debug(f"Stored {len(data)} bytes at {path}")
        return StorageRef(
            bucket=self._root.name,
            key=key,
            size_bytes=len(data),
            sha256=hashlib.sha256(data).hexdigest(),
            content_type=content_type,
        )

    def download(self, key: str) -> bytes:
        try:
            return self._path(key).read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read {key}: {e}") from e

    def get_url(self, key: str, expires_seconds: int = 3600) -> str:
        relative = key.replace("\\", "/").lstrip("/")
        return f"{self._base_url}/{self._prefix}/{relative}"

    def delete(self, key: str) -> bool:
        path = self._path(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Could not delete {key}: {e}") from e
