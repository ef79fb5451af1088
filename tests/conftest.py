"""
Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite database; nothing touches the
database configured in DATABASE_URL unless a test is marked db.
"""

import os
from dataclasses import dataclass, field
from typing import AsyncGenerator, Dict, List
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_document_store
from hiring_dashboard.core.security import hash_password
from hiring_dashboard.db.base import Base
from hiring_dashboard.db.session import get_db
from hiring_dashboard.main import app
from hiring_dashboard.models import (
    Candidate,
    Company,
    Job,
    JobStatus,
    PipelineStage,
    TeamMember,
    TeamRoles,
    User,
)
from hiring_dashboard.services.company_selection_service import CompanySelectionService
from hiring_dashboard.storage.blob_store import LocalBlobStore


TEST_PASSWORD = "secret123"
DEFAULT_STAGES = ["Applied", "Screening", "Offer"]


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")
    config.addinivalue_line("markers", "server: requires running HTTP server")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"
    run_server = os.environ.get("RUN_SERVER_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    skip_server = pytest.mark.skip(reason="server tests skipped by default; set RUN_SERVER_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)
        if "server" in item.keywords and not run_server:
            item.add_marker(skip_server)


@dataclass
class SeededCompany:
    """Ids of a seeded company. Plain ids stay readable after a rollback."""

    company_id: UUID
    name: str
    admin_id: UUID
    admin_email: str
    job_id: UUID
    candidate_id: UUID
    stage_ids: Dict[str, UUID] = field(default_factory=dict)

    @property
    def ordered_stage_ids(self) -> List[UUID]:
        return list(self.stage_ids.values())


async def add_user(db: AsyncSession, email: str, password_hash: str) -> UUID:
    user = User(email=email, hashed_password=password_hash, is_active=True)
    db.add(user)
    await db.flush()
    return user.id


async def add_membership(db: AsyncSession, company_id: UUID, user_id: UUID, role: str) -> None:
    db.add(TeamMember(company_id=company_id, user_id=user_id, role=role))
    await db.flush()


async def seed_company(
    db: AsyncSession,
    name: str,
    password_hash: str,
    stage_names: List[str] = DEFAULT_STAGES,
) -> SeededCompany:
    """Company with an admin, a pipeline, one published job and one candidate in the first stage."""
    slug = name.lower()
    company = Company(name=name, settings={})
    db.add(company)
    await db.flush()

    admin_email = f"admin@{slug}.example.com"
    admin_id = await add_user(db, admin_email, password_hash)
    await add_membership(db, company.id, admin_id, TeamRoles.ADMIN)

    stages = [
        PipelineStage(company_id=company.id, name=stage_name, order_index=index)
        for index, stage_name in enumerate(stage_names)
    ]
    job = Job(
        company_id=company.id,
        title=f"{name} Backend Engineer",
        status=JobStatus.PUBLISHED,
        created_by=admin_id,
    )
    db.add_all(stages + [job])
    await db.flush()

    candidate = Candidate(
        company_id=company.id,
        job_id=job.id,
        first_name="Ada",
        last_name=name,
        email=f"ada@{slug}.example.com",
        current_stage_id=stages[0].id if stages else None,
        created_by=admin_id,
    )
    db.add(candidate)
    await db.flush()

    seeded = SeededCompany(
        company_id=company.id,
        name=name,
        admin_id=admin_id,
        admin_email=admin_email,
        job_id=job.id,
        candidate_id=candidate.id,
        stage_ids={stage.name: stage.id for stage in stages},
    )
    await db.commit()
    return seeded


async def context_for(db: AsyncSession, user_id: UUID, company_id: UUID) -> SessionContext:
    return await CompanySelectionService(db).resolve_session(user_id, company_id)


@pytest.fixture(scope="session")
def password_hash() -> str:
    return hash_password(TEST_PASSWORD)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def acme(db, password_hash) -> SeededCompany:
    return await seed_company(db, "Acme", password_hash)


@pytest.fixture
async def globex(db, password_hash) -> SeededCompany:
    return await seed_company(db, "Globex", password_hash)


@pytest.fixture
async def acme_ctx(db, acme) -> SessionContext:
    """Admin of Acme acting on Acme."""
    return await context_for(db, acme.admin_id, acme.company_id)


@pytest.fixture
async def acme_member_ctx(db, acme, password_hash) -> SessionContext:
    """Plain member of Acme acting on Acme."""
    user_id = await add_user(db, "recruiter@acme.example.com", password_hash)
    await add_membership(db, acme.company_id, user_id, TeamRoles.MEMBER)
    await db.commit()
    return await context_for(db, user_id, acme.company_id)


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "blobs")


@pytest.fixture
async def client(session_maker, blob_store) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the test database and blob store."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_store] = lambda: blob_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
