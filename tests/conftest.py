"""Pytest configuration and fixtures for sikap.

HTTP tests run sikap.main:app over ASGITransport with the DB-backed
dependencies replaced by in-memory fakes and storage rooted at tmp_path.
DB-dependent fixtures use sikap.infrastructure.persistence.database and
skip when DATABASE_URL is not set.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from sikap.api.v1.dependencies import (
    get_activity_log_service,
    get_application_repo,
    get_content_scanner,
    get_document_repo,
    get_storage_service,
    get_user_repo,
)
from sikap.application.dtos.activity_log import ActivityLogEntryCreate
from sikap.application.dtos.application import ApplicationRequirements, RequiredDocument
from sikap.application.dtos.document import DocumentCreate, DocumentResult
from sikap.application.dtos.user import UserResult
from sikap.core.limiter import limiter
from sikap.infrastructure.external.scanning import PatternContentScanner
from sikap.infrastructure.external.storage.local_storage import LocalStorageService
from sikap.infrastructure.persistence import database
from sikap.infrastructure.services import ActivityLogService
from sikap.main import app
from sikap.shared.utils.datetime import utc_now
from sikap.shared.utils.generators import generate_cuid

PRIVATE_APPLICATION_ID = "app-private-1"
PUBLIC_APPLICATION_ID = "app-public-1"
PUBLIC_TOKEN = "public-token-abc123"
SYSTEM_USER = UserResult(id="user-system", username="system", email=None, is_active=True)


class FakeApplicationRepository:
    """In-memory IApplicationRepository."""

    def __init__(self, applications: list[ApplicationRequirements]) -> None:
        self.applications = {a.id: a for a in applications}

    async def get_with_required_documents(
        self, application_id: str
    ) -> ApplicationRequirements | None:
        return self.applications.get(application_id)


class FakeDocumentRepository:
    """In-memory IDocumentRepository; enforces the (application, type, hash) uniqueness."""

    def __init__(self) -> None:
        self.documents: list[DocumentResult] = []

    async def find_duplicate(
        self, application_id: str, document_type: str, file_hash: str
    ) -> DocumentResult | None:
        for doc in self.documents:
            if (doc.application_id, doc.document_type, doc.file_hash) == (
                application_id,
                document_type,
                file_hash,
            ):
                return doc
        return None

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        # Strictly increasing timestamps keep "newest first" deterministic.
        uploaded_at = utc_now() + timedelta(microseconds=len(self.documents))
        document = DocumentResult(
            id=generate_cuid(),
            application_id=data.application_id,
            document_type=data.document_type,
            original_filename=data.original_filename,
            stored_filename=data.stored_filename,
            relative_path=data.relative_path,
            file_size=data.file_size,
            mime_type=data.mime_type,
            file_hash=data.file_hash,
            uploaded_by=data.uploaded_by,
            uploaded_at=uploaded_at,
            virus_scan_result=data.virus_scan_result,
        )
        self.documents.append(document)
        return document

    async def list_by_application(self, application_id: str) -> list[DocumentResult]:
        docs = [d for d in self.documents if d.application_id == application_id]
        return sorted(docs, key=lambda d: d.uploaded_at, reverse=True)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        return next((d for d in self.documents if d.id == document_id), None)


class FakeUserRepository:
    """In-memory IUserRepository."""

    def __init__(self, users: list[UserResult]) -> None:
        self.users = {u.username: u for u in users}

    async def get_by_username(self, username: str) -> UserResult | None:
        return self.users.get(username)


class FakeActivityLogRepository:
    """In-memory IActivityLogRepository that keeps every entry."""

    def __init__(self) -> None:
        self.entries: list[ActivityLogEntryCreate] = []

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogEntryCreate:
        self.entries.append(entry)
        return entry


class FakeBackend:
    """Bundle of fakes wired into the app for one test."""

    def __init__(self, storage_root: str) -> None:
        required = [
            RequiredDocument(key="proposal", name="Proposal", required=True),
            RequiredDocument(key="profile", name="Institution profile", required=True),
        ]
        self.applications = FakeApplicationRepository(
            [
                ApplicationRequirements(
                    id=PRIVATE_APPLICATION_ID,
                    tracking_number="SIKAP-0001",
                    is_public_submission=False,
                    public_token=None,
                    user_id="user-owner",
                    required_documents=required,
                ),
                ApplicationRequirements(
                    id=PUBLIC_APPLICATION_ID,
                    tracking_number="SIKAP-0002",
                    is_public_submission=True,
                    public_token=PUBLIC_TOKEN,
                    user_id=None,
                    required_documents=required,
                ),
            ]
        )
        self.documents = FakeDocumentRepository()
        self.users = FakeUserRepository([SYSTEM_USER])
        self.activity = FakeActivityLogRepository()
        self.storage = LocalStorageService(storage_root=storage_root)
        self.scanner = PatternContentScanner(simulated_delay_seconds=0)

    def without_system_user(self) -> None:
        self.users.users.clear()


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    """Rate limit counters are process-wide; start every test from zero."""
    limiter.reset()


@pytest.fixture
def fake_backend(tmp_path) -> FakeBackend:
    return FakeBackend(storage_root=str(tmp_path / "storage"))


@pytest.fixture
async def client(fake_backend: FakeBackend) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with in-memory collaborators."""
    app.dependency_overrides[get_application_repo] = lambda: fake_backend.applications
    app.dependency_overrides[get_document_repo] = lambda: fake_backend.documents
    app.dependency_overrides[get_user_repo] = lambda: fake_backend.users
    app.dependency_overrides[get_activity_log_service] = lambda: ActivityLogService(
        fake_backend.activity
    )
    app.dependency_overrides[get_storage_service] = lambda: fake_backend.storage
    app.dependency_overrides[get_content_scanner] = lambda: fake_backend.scanner
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def bare_client() -> AsyncClient:
    """Client without dependency overrides (real DB wiring)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL and a migrated schema (alembic upgrade head). Skips
    when Postgres is not configured. Use @pytest.mark.requires_db to mark
    tests that need this fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, "
            "then run: uv run alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        await session.begin()
        try:
            yield session
        finally:
            await session.rollback()
    await database.dispose_engine()
