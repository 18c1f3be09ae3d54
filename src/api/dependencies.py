"""
Wiring + request dependencies.

``ServiceContainer`` builds the use cases with concrete adapters once per
app; routes pull it from ``request.app.state.container``. Caller identity
comes from the upstream auth gateway (``X-Driver-Id``) and the admin key
(``X-API-Key``).
"""

import secrets
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from src.config.settings import Settings, get_settings
from src.core.exceptions import AuthorizationError
from src.core.interfaces.storage_service import IStorageService
from src.core.rules.requirement_catalog import RequirementCatalog
from src.core.use_cases.manage_driver import ManageDriverUseCase
from src.core.use_cases.query_documents import QueryDocumentsUseCase
from src.core.use_cases.recompute_status import RecomputeDriverStatusUseCase
from src.core.use_cases.remove_document_image import RemoveDocumentImageUseCase
from src.core.use_cases.resend_document import ResendDocumentUseCase
from src.core.use_cases.review_document import ReviewDocumentUseCase
from src.core.use_cases.submit_document import SubmitDocumentUseCase
from src.infrastructure.db.database import create_db_engine, create_session_factory, init_db
from src.infrastructure.db.repository import DocumentRepository, DriverDirectory
from src.infrastructure.storage.factory import build_storage


@dataclass
class ServiceContainer:
    settings: Settings
    engine: Engine
    storage: IStorageService
    catalog: RequirementCatalog
    documents: DocumentRepository
    drivers: DriverDirectory
    recompute: RecomputeDriverStatusUseCase
    submit: SubmitDocumentUseCase
    resend: ResendDocumentUseCase
    review: ReviewDocumentUseCase
    remove_image: RemoveDocumentImageUseCase
    queries: QueryDocumentsUseCase
    manage: ManageDriverUseCase

    def init_db(self):
        init_db(self.engine)


def build_container(
    settings: Settings | None = None,
    engine: Engine | None = None,
    session_factory: sessionmaker | None = None,
    storage: IStorageService | None = None,
    catalog: RequirementCatalog | None = None,
) -> ServiceContainer:
    """Factory — build every use case with concrete adapters."""
    settings = settings or get_settings()
    engine = engine or create_db_engine(settings.database_url)
    session_factory = session_factory or create_session_factory(engine)
    storage = storage or build_storage(settings)
    catalog = catalog or RequirementCatalog()

    documents = DocumentRepository(session_factory)
    drivers = DriverDirectory(session_factory)
    recompute = RecomputeDriverStatusUseCase(drivers, documents, catalog)

    return ServiceContainer(
        settings=settings,
        engine=engine,
        storage=storage,
        catalog=catalog,
        documents=documents,
        drivers=drivers,
        recompute=recompute,
        submit=SubmitDocumentUseCase(
            documents, drivers, storage, catalog, recompute,
            max_upload_bytes=settings.max_upload_bytes,
        ),
        resend=ResendDocumentUseCase(documents, recompute),
        review=ReviewDocumentUseCase(documents, recompute),
        remove_image=RemoveDocumentImageUseCase(documents, storage, recompute),
        queries=QueryDocumentsUseCase(documents, drivers, catalog),
        manage=ManageDriverUseCase(drivers, documents, catalog, recompute),
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


@dataclass
class Caller:
    """Authentication context of one request."""
    driver_id: str | None
    is_admin: bool


def get_caller(
    request: Request,
    x_driver_id: str | None = Header(default=None),
    x_api_key: str | None = Header(default=None),
) -> Caller:
    expected = get_container(request).settings.admin_api_key
    is_admin = bool(x_api_key) and bool(expected) and secrets.compare_digest(x_api_key.encode(), expected.encode())
    driver_id = x_driver_id.strip() if x_driver_id and x_driver_id.strip() else None
    return Caller(driver_id=driver_id, is_admin=is_admin)


def current_driver_id(caller: Caller = Depends(get_caller)) -> str:
    if not caller.driver_id:
        raise HTTPException(status_code=401, detail="User not authenticated")
    return caller.driver_id


def require_admin(
    x_api_key: str | None = Header(default=None),
    caller: Caller = Depends(get_caller),
) -> Caller:
    if not x_api_key:
        raise HTTPException(status_code=401, detail="No admin key provided")
    if not caller.is_admin:
        raise AuthorizationError("Admin access only")
    return caller
