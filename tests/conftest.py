# Standard Library
from typing import AsyncGenerator, Dict

# Third-Party Libraries
import pytest
import pytest_asyncio

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# First-Party Libraries
from quotebuilder.main import app
from quotebuilder.database import get_db_session
from quotebuilder.items.domain.entities import DoorItem, WindowItem
from quotebuilder.quotes.infrastructure import orm_models  # noqa: F401  (enregistre les tables)

# URL de base pour la DB en mémoire
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

OWNER_ID = "user-1"
OWNER_EMAIL = "builder@example.com"

# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Engine en mémoire partagé par toutes les sessions d'un test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Fournit une session DB en mémoire pour chaque test."""
    TestingSessionLocal = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Fournit un AsyncClient httpx qui utilise la session DB de test isolée."""
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers() -> Dict[str, str]:
    """En-têtes d'identité transmis par la passerelle d'authentification."""
    return {"X-User-Id": OWNER_ID, "X-User-Email": OWNER_EMAIL}

# --- Articles ---

@pytest.fixture
def casement_window() -> WindowItem:
    return WindowItem(
        width="36",
        height="48",
        style="casement",
        sub_option="left",
        color="bronze",
        material="aluminum",
        measurement_given="dlo",
    )


@pytest.fixture
def lh_door() -> DoorItem:
    return DoorItem(
        width="36",
        height="80",
        panel_type="single",
        handing="lh-in",
        notes="Threshold to match tile",
    )
