import asyncpg
import httpx
import pytest
import pytest_asyncio
from testcontainers.postgres import PostgresContainer

from backoffice.api.main import create_app
from backoffice.config import Settings
from backoffice.db_context import DatabaseManager
from backoffice.schema import create_schema, truncate_all


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL test container for the session."""
    with PostgresContainer("postgres:17") as postgres:
        yield postgres


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings for an app under test: open auth, uploads in a temp dir."""
    return Settings(
        api_url="http://test",
        admin_api_token=None,
        upload_dir=str(tmp_path / "uploads"),
        create_schema=False,
    )


@pytest_asyncio.fixture
async def db(postgres_container):
    """A DatabaseManager over a fresh pool with the back-office schema, emptied afterwards."""
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    dsn = f"postgresql://{postgres_container.username}:{postgres_container.password}@{host}:{port}/{postgres_container.dbname}"

    # Create a new pool for each test to avoid event loop issues
    pool = await asyncpg.create_pool(dsn, min_size=1, max_size=5)
    manager = DatabaseManager(pool)
    await create_schema(manager)

    yield manager

    await truncate_all(manager)
    await manager.close()


@pytest_asyncio.fixture
async def client(db, settings):
    """HTTP client bound to an app that uses the test database."""
    app = create_app(settings, db=db)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest_asyncio.fixture
async def offline_client(settings):
    """HTTP client for requests that must be rejected before touching the database."""
    app = create_app(settings, db=DatabaseManager(None))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
