"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the async SQLAlchemy engine, session factory, ORM base class,
and the transaction scope used by every repository call.
"""

import logging
from collections.abc import AsyncGenerator, Generator
from contextlib import asynccontextmanager, contextmanager

from sqlalchemy import event
from sqlalchemy.exc import DBAPIError, DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from roster.config import settings
from roster.utils.exceptions import PersistenceError, TransientError

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """비동기 엔진을 생성합니다.

    Create the async engine. SQLite URLs get a single shared connection
    and foreign key enforcement; everything else gets a pooled engine.

    Args:
        database_url: 연결 문자열, None이면 설정값 사용 (Connection URL, defaults to settings)
        echo: SQL 로그 출력 여부 (Echo SQL, defaults to settings.DEBUG)

    Returns:
        AsyncEngine: 생성된 엔진 (Configured engine)
    """
    url: str = database_url or settings.DATABASE_URL
    echo = settings.DEBUG if echo is None else echo

    if url.startswith("sqlite"):
        eng: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        # SQLite는 외래 키 검사가 기본 비활성 — SQLite ships with FK checks off
        @event.listens_for(eng.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return eng

    # pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine: AsyncEngine = create_db_engine()

# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


@contextmanager
def translate_db_errors() -> Generator[None, None, None]:
    """드라이버 예외를 도메인 예외로 변환합니다.

    Translate SQLAlchemy/driver errors raised inside the block:
    constraint violations become PersistenceError, connectivity problems
    and timeouts become TransientError.
    """
    try:
        yield
    except IntegrityError as exc:
        logger.warning("integrity violation: %s", exc.orig)
        raise PersistenceError(str(exc.orig)) from exc
    except (OperationalError, DisconnectionError, PoolTimeoutError) as exc:
        logger.error("store unavailable: %s", exc)
        raise TransientError(str(exc)) from exc
    except DBAPIError as exc:
        if exc.connection_invalidated:
            raise TransientError(str(exc)) from exc
        raise


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """트랜잭션 범위를 열고 종료 시 커밋 또는 롤백합니다.

    Open a unit of work. Everything done through the yielded session sees its
    own uncommitted changes; the scope commits on normal exit and rolls back
    on any exception. The session is always closed.

    Usage:
        async with transaction() as db:
            await member_repository.save(db, member)

    Args:
        session_factory: 세션 팩토리, None이면 전역 팩토리 사용
                         (Session factory, defaults to the module factory)

    Yields:
        AsyncSession: 범위에 묶인 세션 (Session bound to the scope)
    """
    factory = session_factory or async_session
    session: AsyncSession = factory()
    try:
        yield session
        with translate_db_errors():
            await session.commit()
    except Exception:
        logger.debug("rolling back transaction scope")
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session.
    Routes commit explicitly; anything uncommitted is discarded on close.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_all_tables(engine_instance: AsyncEngine | None = None) -> None:
    """모든 테이블을 생성합니다 — Create all tables."""
    import roster.models  # noqa: F401 — register all models with metadata

    async with (engine_instance or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables(engine_instance: AsyncEngine | None = None) -> None:
    """모든 테이블을 삭제합니다 — Drop all tables."""
    import roster.models  # noqa: F401

    async with (engine_instance or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
