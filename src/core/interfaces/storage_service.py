"""
Contract: Storage Service

Persists uploaded document files in object storage
(MinIO/S3/local filesystem) and resolves them back to URLs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class StorageRef:
    """Reference to a stored file."""
    bucket: str
    key: str
    size_bytes: int
    sha256: str
    content_type: str


class IStorageService(ABC):
    """
    Port: Storage Service

    Writing the same key twice overwrites it, so a failed upload can be
    retried safely. Implementations raise StorageError on failure.
    """

    @abstractmethod
    def upload(self, data: bytes, key: str, content_type: str = "application/octet-stream") -> StorageRef:
        """
        Upload a file.

        Args:
            data: File content.
            key: Path/key inside the storage.
            content_type: MIME type.

        Returns:
            StorageRef with location and hash.
        """
        ...

    @abstractmethod
    def download(self, key: str) -> bytes:
        """Download a stored file."""
        ...

    @abstractmethod
    def get_url(self, key: str, expires_seconds: int = 3600) -> str:
        """
        Build a URL for reading the file.

        Args:
            key: Path/key inside the storage.
            expires_seconds: Lifetime of signed URLs (ignored by public backends).
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a stored file. Returns False if it did not exist."""
        ...
