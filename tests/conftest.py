"""
pytest fixtures for the driver document service.

Each test gets a fresh in-memory SQLite database and an in-memory storage
double wired through the real container.
"""
import hashlib

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import build_container
from src.config.settings import Settings
from src.core.exceptions import StorageError
from src.core.interfaces.storage_service import IStorageService, StorageRef
from src.core.use_cases.submit_document import UploadedFile
from src.infrastructure.db.database import create_db_engine


ADMIN_KEY = "test-admin-key"


class InMemoryStorage(IStorageService):
    """Storage double; flip ``fail`` to simulate an outage."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.fail = False

    def upload(self, data, key, content_type="application/octet-stream"):
        if self.fail:
            raise StorageError("storage offline")
        self.files[key] = data
        return StorageRef(
            bucket="memory",
            key=key,
            size_bytes=len(data),
            sha256=hashlib.sha256(data).hexdigest(),
            content_type=content_type,
        )

    def download(self, key):
        if key not in self.files:
            raise StorageError(f"missing {key}")
        return self.files[key]

    def get_url(self, key, expires_seconds=3600):
        return f"memory://{key}"

    def delete(self, key):
        return self.files.pop(key, None) is not None


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        storage_backend="local",
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://testserver",
        admin_api_key=ADMIN_KEY,
        max_upload_bytes=1024,
    )


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def container(settings, storage):
    engine = create_db_engine("sqlite://")
    c = build_container(settings=settings, engine=engine, storage=storage)
    c.init_db()
    yield c
    engine.dispose()


@pytest.fixture
def register(container):
    """Register a driver: register("drv-1", vehicle_type="bike")."""
    def _register(driver_id="drv-1", vehicle_type="bike", phone="+919876543210", name="Ravi Kumar"):
        return container.manage.register(driver_id, name=name, phone=phone, vehicle_type=vehicle_type)
    return _register


@pytest.fixture
def upload(container):
    """Submit a document through the upload pipeline."""
    def _upload(driver_id, doc_type, vehicle_type="bike", side=None, extracted=None,
                content=b"\xff\xd8fake-jpeg", filename="doc.jpg"):
        return container.submit.execute(
            driver_id=driver_id,
            doc_type=doc_type,
            vehicle_type=vehicle_type,
            file=UploadedFile(content=content, filename=filename, content_type="image/jpeg"),
            side=side,
            extracted_data=extracted,
        )
    return _upload


@pytest.fixture
def client(container):
    app = create_app(container)
    with TestClient(app) as c:
        yield c
