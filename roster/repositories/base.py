"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic save/find/delete/count operations. Every method takes the
session of the caller's transaction scope as its first argument; nothing
here commits.

Usage:
    class TeamRepository(BaseRepository[Team]):
        def __init__(self) -> None:
            super().__init__(Team)
"""

import logging
from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.database import Base, translate_db_errors
from roster.utils.exceptions import NotFoundError
from roster.utils.pagination import Page, PageRequest, Sort, apply_sort, paginate

logger = logging.getLogger(__name__)

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    async def _attach(self, db: AsyncSession, entity: ModelType) -> ModelType:
        # id가 있지만 이 범위가 추적하지 않는 엔티티는 merge — untracked entities with an id are merged
        state = inspect(entity)
        if entity.id is not None and (state.transient or state.detached):
            return await db.merge(entity)
        db.add(entity)
        return entity

    async def save(self, db: AsyncSession, entity: ModelType) -> ModelType:
        """엔티티를 저장합니다. id가 없으면 INSERT, 있으면 UPDATE.

        Insert the entity when it has no identity yet, otherwise update it.
        An entity carrying an id that this scope does not track (detached, or
        newly built with an existing id) is merged into the scope and the
        merged (persistent) instance is returned. The scope is flushed, so
        the returned entity always carries its id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            entity: 저장할 엔티티 (Entity to persist)

        Returns:
            ModelType: id가 부여된 영속 엔티티 (Persistent entity with id)

        Raises:
            PersistenceError: 제약 조건 위반 (Constraint violation)
            TransientError: 저장소 장애 (Store unavailable)
        """
        with translate_db_errors():
            entity = await self._attach(db, entity)
            await db.flush()
        logger.debug("saved %r", entity)
        return entity

    async def save_all(self, db: AsyncSession, entities: Iterable[ModelType]) -> list[ModelType]:
        """여러 엔티티를 저장합니다 — Save several entities in one flush."""
        saved: list[ModelType] = []
        with translate_db_errors():
            for entity in entities:
                saved.append(await self._attach(db, entity))
            await db.flush()
        return saved

    async def find_by_id(self, db: AsyncSession, record_id: Any) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its id. Within the same scope this returns
        the very instance that was saved.

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        with translate_db_errors():
            return await db.get(self.model, record_id)

    async def find_all(self, db: AsyncSession, sort: Sort | None = None) -> Sequence[ModelType]:
        """모든 레코드를 조회합니다. 정렬이 없으면 순서는 보장되지 않음.

        Retrieve all records, ordered by sort when given.
        """
        query: Select = apply_sort(select(self.model), self.model, sort)
        with translate_db_errors():
            result = await db.execute(query)
        return result.scalars().all()

    async def find_all_by_ids(self, db: AsyncSession, record_ids: Iterable[Any]) -> Sequence[ModelType]:
        """ID 목록에 해당하는 레코드를 조회합니다 — Records whose id is in record_ids."""
        ids: list[Any] = list(record_ids)
        if not ids:
            return []
        query: Select = select(self.model).where(self.model.id.in_(ids)).order_by(self.model.id)
        with translate_db_errors():
            result = await db.execute(query)
        return result.scalars().all()

    async def find_page(self, db: AsyncSession, page_request: PageRequest) -> Page[ModelType]:
        """전체 레코드를 페이지 단위로 조회합니다.

        Page over every record using the request's sort.
        """
        query: Select = apply_sort(select(self.model), self.model, page_request.sort)
        with translate_db_errors():
            items, total = await paginate(db, query, page_request)
        return Page.build(items, page_request, total)

    async def count(self, db: AsyncSession) -> int:
        """전체 레코드 수를 반환합니다 — Total row count."""
        query: Select = select(func.count()).select_from(self.model)
        with translate_db_errors():
            return (await db.execute(query)).scalar() or 0

    async def exists_by_id(self, db: AsyncSession, record_id: Any) -> bool:
        """해당 ID의 레코드 존재 여부 — Whether a row with record_id exists."""
        query: Select = select(func.count()).select_from(self.model).where(self.model.id == record_id)
        with translate_db_errors():
            count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def delete(self, db: AsyncSession, entity: ModelType) -> None:
        """엔티티를 식별자로 삭제합니다.

        Delete the row identified by entity.id. Detached entities are resolved
        against the scope first.

        Raises:
            NotFoundError: id가 없거나 해당 행이 없을 때 (No identity or no such row)
        """
        if entity.id is None:
            raise NotFoundError(f"{self.model.__name__} has no identity")
        if not await self.delete_by_id(db, entity.id):
            raise NotFoundError(f"{self.model.__name__} {entity.id} not found")

    async def delete_by_id(self, db: AsyncSession, record_id: Any) -> bool:
        """레코드를 삭제합니다.

        Delete a record by its id.

        Returns:
            bool: 삭제 성공 여부, 없으면 False (Whether a row was removed)
        """
        db_obj: ModelType | None = await self.find_by_id(db, record_id)
        if db_obj is None:
            return False

        await db.delete(db_obj)
        with translate_db_errors():
            await db.flush()
        logger.info("deleted %s id=%s", self.model.__name__, record_id)
        return True
