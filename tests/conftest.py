"""테스트 인프라 — 테스트 DB 엔진, 세션, httpx 클라이언트 픽스처.

Test infrastructure — engine, session and httpx client fixtures.
Each test gets a fresh schema on TEST_DATABASE_URL (in-memory SQLite via
aiosqlite by default); everything is dropped afterwards.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from roster.database import Base, create_db_engine, get_db
from roster.main import app
from roster.models import Member, Team  # noqa: F401 — register all models with metadata
from roster.utils.auditor import set_current_actor

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 새로 만듭니다."""
    eng = create_db_engine(TEST_DATABASE_URL, echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다 (하나의 트랜잭션 범위)."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture(autouse=True)
def reset_actor():
    """테스트 사이에 행위자 컨텍스트가 새지 않도록 초기화합니다."""
    set_current_actor(None)
    yield
    set_current_actor(None)


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def team_a(db: AsyncSession) -> Team:
    """테스트 팀 teamA를 생성합니다."""
    team = Team(name="teamA")
    db.add(team)
    await db.flush()
    return team


@pytest_asyncio.fixture
async def team_b(db: AsyncSession) -> Team:
    """테스트 팀 teamB를 생성합니다."""
    team = Team(name="teamB")
    db.add(team)
    await db.flush()
    return team
