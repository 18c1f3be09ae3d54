"""
Storage factory — picks the IStorageService adapter from settings.
"""

from src.config.settings import Settings
from src.core.interfaces.storage_service import IStorageService


def build_storage(settings: Settings) -> IStorageService:
    backend = (settings.storage_backend or "local").strip().lower()

    if backend == "minio":
        from src.infrastructure.storage.minio_storage import MinIOStorageService
        return MinIOStorageService(
            endpoint=settings.minio_endpoint,
            access_key=settings.minio_access_key,
            secret_key=settings.minio_secret_key,
            bucket=settings.minio_bucket,
            region=settings.minio_region,
        )
    if backend == "local":
        from src.infrastructure.storage.local_storage import LocalFileStorage
        return LocalFileStorage(
            root_dir=settings.upload_dir,
            public_base_url=settings.public_base_url,
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend!r} (expected 'local' or 'minio')")
