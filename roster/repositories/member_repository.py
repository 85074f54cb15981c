"""회원 레포지토리 — 회원 CRUD 및 조건 조회.

Member Repository — CRUD plus the member-specific reads and writes:
fixed-predicate filters, paging by age, projections, query by example,
the hand-written SQL read and the bulk age increment.
"""

import logging
from typing import Iterable

from sqlalchemy import Select, func, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, joinedload

from roster.database import translate_db_errors
from roster.mappers.member_mapper import (
    row_to_member_dto,
    row_to_member_projection,
    row_to_team_projection,
    row_to_username_only,
)
from roster.models.member import Member
from roster.models.team import Team
from roster.repositories.base import BaseRepository
from roster.schemas.member import MemberDto, MemberProjection, MemberTeamProjection, UsernameOnly
from roster.utils.exceptions import InvalidArgumentError
from roster.utils.pagination import Page, PageRequest, apply_sort, check_window, paginate

logger = logging.getLogger(__name__)

# 네이티브 프로젝션 조회 — hand-written read over members left-joined with teams
_NATIVE_PROJECTION_SQL = text(
    "SELECT m.member_id AS id, m.username AS username, t.name AS team_name "
    "FROM members m LEFT JOIN teams t ON m.team_id = t.team_id "
    "ORDER BY m.member_id "
    "LIMIT :limit OFFSET :offset"
)
_NATIVE_PROJECTION_COUNT_SQL = text("SELECT count(*) FROM members")

# 예제 조회에서 비교 대상이 되는 컬럼 — columns a probe may constrain
_EXAMPLE_PATHS: tuple[str, ...] = ("id", "username", "age")


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    Ordering is by id (insertion order) wherever no sort is requested.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def _scalars(self, db: AsyncSession, query: Select) -> list[Member]:
        with translate_db_errors():
            result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_username_and_age_greater_than(
        self,
        db: AsyncSession,
        username: str,
        age: int,
    ) -> list[Member]:
        """사용자명이 같고 나이가 age보다 큰 회원을 조회합니다.

        Members with exactly this username and an age strictly greater
        than age, in insertion order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 비교할 사용자명 (Username, equality)
            age: 하한 나이, 미포함 (Exclusive lower bound on age)

        Returns:
            list[Member]: 조건에 맞는 회원 목록 (Matching members)
        """
        query: Select = (
            select(Member)
            .where(Member.username == username, Member.age > age)
            .order_by(Member.id)
        )
        return await self._scalars(db, query)

    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """사용자명으로 회원을 조회합니다 — Members with this username."""
        query: Select = select(Member).where(Member.username == username).order_by(Member.id)
        return await self._scalars(db, query)

    async def find_user(self, db: AsyncSession, username: str, age: int) -> list[Member]:
        """사용자명과 나이가 모두 일치하는 회원을 조회합니다."""
        query: Select = (
            select(Member)
            .where(Member.username == username, Member.age == age)
            .order_by(Member.id)
        )
        return await self._scalars(db, query)

    async def find_username_list(self, db: AsyncSession) -> list[str]:
        """모든 회원의 사용자명 목록 — Every username, in insertion order."""
        with translate_db_errors():
            result = await db.execute(select(Member.username).order_by(Member.id))
        return list(result.scalars().all())

    async def find_member_dto(self, db: AsyncSession) -> list[MemberDto]:
        """회원 id/사용자명과 팀 이름을 조인으로 조회합니다.

        Inner join with teams: members without a team are not returned.
        """
        query: Select = (
            select(Member.id.label("id"), Member.username.label("username"), Team.name.label("team_name"))
            .join(Team, Member.team_id == Team.id)
            .order_by(Member.id)
        )
        with translate_db_errors():
            result = await db.execute(query)
        return [row_to_member_dto(row) for row in result.all()]

    async def find_by_names(self, db: AsyncSession, names: Iterable[str]) -> list[Member]:
        """사용자명 목록에 포함된 회원을 조회합니다 — username IN names."""
        name_list: list[str] = list(names)
        if not name_list:
            return []
        query: Select = select(Member).where(Member.username.in_(name_list)).order_by(Member.id)
        return await self._scalars(db, query)

    async def find_by_team(self, db: AsyncSession, team_id: int) -> list[Member]:
        """팀에 소속된 회원을 조회합니다 — Members referencing team_id."""
        query: Select = select(Member).where(Member.team_id == team_id).order_by(Member.id)
        return await self._scalars(db, query)

    async def find_by_age(
        self,
        db: AsyncSession,
        age: int,
        page_request: PageRequest,
    ) -> Page[Member]:
        """나이가 같은 회원을 페이지 단위로 조회합니다.

        Page over members of the given age, sorted by the request's sort.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            age: 조회할 나이 (Age to match)
            page_request: 페이지 요청 (Page index, size, sort)

        Returns:
            Page[Member]: 회원 페이지 (Page with content and metadata)

        Raises:
            InvalidArgumentError: 잘못된 페이지 인자 또는 정렬 속성
        """
        query: Select = apply_sort(select(Member).where(Member.age == age), Member, page_request.sort)
        count_query: Select = select(func.count()).select_from(Member).where(Member.age == age)
        with translate_db_errors():
            items, total = await paginate(db, query, page_request, count_query=count_query)
        return Page.build(items, page_request, total)

    async def find_by_age_window(
        self,
        db: AsyncSession,
        age: int,
        offset: int,
        limit: int,
    ) -> list[Member]:
        """offset/limit으로 나이가 같은 회원을 조회합니다 (사용자명 내림차순).

        Raw window read ordered by username descending.

        Raises:
            InvalidArgumentError: offset < 0 또는 limit <= 0
        """
        if offset < 0:
            raise InvalidArgumentError(f"Offset must not be negative, got {offset}")
        if limit <= 0:
            raise InvalidArgumentError(f"Limit must be positive, got {limit}")
        query: Select = (
            select(Member)
            .where(Member.age == age)
            .order_by(Member.username.desc())
            .offset(offset)
            .limit(limit)
        )
        return await self._scalars(db, query)

    async def count_by_age(self, db: AsyncSession, age: int) -> int:
        """나이가 같은 회원 수 — Count of members with this age."""
        query: Select = select(func.count()).select_from(Member).where(Member.age == age)
        with translate_db_errors():
            return (await db.execute(query)).scalar() or 0

    async def bulk_age_plus(self, db: AsyncSession, threshold: int) -> int:
        """age >= threshold인 모든 회원의 나이를 1 증가시킵니다.

        Single UPDATE statement; audit columns are left untouched because
        the statement bypasses the unit of work. Pending changes are flushed
        first, and members already loaded in this scope get the new age
        applied in memory, so they stay readable without another load.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            threshold: 포함 하한 나이 (Inclusive lower bound on age)

        Returns:
            int: 변경된 행 수 (Number of rows updated)
        """
        with translate_db_errors():
            await db.flush()
            result = await db.execute(
                update(Member)
                .where(Member.age >= threshold)
                .values(age=Member.age + 1)
                .execution_options(synchronize_session="evaluate")
            )
        logger.info("bulk age increment for age >= %s touched %s rows", threshold, result.rowcount)
        return result.rowcount

    async def find_all_with_team(self, db: AsyncSession) -> list[Member]:
        """회원과 소속 팀을 한 번에 조회합니다 (fetch join).

        Members with their team loaded in the same statement, so member.team
        is safe to read afterwards.
        """
        query: Select = (
            select(Member)
            .outerjoin(Member.team)
            .options(contains_eager(Member.team))
            .order_by(Member.id)
        )
        return await self._scalars(db, query)

    async def find_by_id_with_team(self, db: AsyncSession, member_id: int) -> Member | None:
        """팀을 함께 로드하여 단건 조회합니다 — One member with its team loaded."""
        query: Select = select(Member).options(joinedload(Member.team)).where(Member.id == member_id)
        with translate_db_errors():
            result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_read_only_by_username(self, db: AsyncSession, username: str) -> Member | None:
        """읽기 전용으로 회원을 조회합니다.

        Read-only hint: the loaded member is detached from the scope, so later
        mutations on it are never flushed. Any instance for the same row that
        the scope already tracked is detached as well.
        """
        query: Select = select(Member).where(Member.username == username).order_by(Member.id).limit(1)
        with translate_db_errors():
            result = await db.execute(query)
        member: Member | None = result.scalar_one_or_none()
        if member is not None:
            db.expunge(member)
        return member

    async def find_by_example(
        self,
        db: AsyncSession,
        probe: Member,
        ignore_paths: Iterable[str] = (),
    ) -> list[Member]:
        """예제(probe) 엔티티로 회원을 조회합니다.

        Query by example: every non-None column of the probe outside
        ignore_paths becomes an equality predicate. A probe team with a name
        adds an inner join on teams matching that name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            probe: 조건을 담은 비영속 회원 (Transient member holding the criteria)
            ignore_paths: 무시할 속성 경로, 예: {"age", "team.name"}
                          (Paths to ignore, e.g. {"age", "team.name"})

        Returns:
            list[Member]: 조건에 맞는 회원 목록 (Matching members)
        """
        ignored: set[str] = set(ignore_paths)
        query: Select = select(Member)
        for path in _EXAMPLE_PATHS:
            value = getattr(probe, path)
            if path not in ignored and value is not None:
                query = query.where(getattr(Member, path) == value)

        probe_team: Team | None = probe.team
        if probe_team is not None and "team" not in ignored:
            query = query.join(Team, Member.team_id == Team.id)
            if probe_team.name is not None and "team.name" not in ignored:
                query = query.where(Team.name == probe_team.name)

        return await self._scalars(db, query.order_by(Member.id))

    async def find_projections_by_username(self, db: AsyncSession, username: str) -> list[MemberTeamProjection]:
        """사용자명 + 팀 이름 중첩 프로젝션을 조회합니다.

        Reads only members.username and teams.name; the Team entity is never
        materialised.
        """
        query: Select = (
            select(Member.username.label("username"), Team.name.label("team_name"))
            .outerjoin(Team, Member.team_id == Team.id)
            .where(Member.username == username)
            .order_by(Member.id)
        )
        with translate_db_errors():
            result = await db.execute(query)
        return [row_to_team_projection(row) for row in result.all()]

    async def find_username_only_by_username(self, db: AsyncSession, username: str) -> list[UsernameOnly]:
        """사용자명만 담은 프로젝션을 조회합니다."""
        query: Select = (
            select(Member.username.label("username"))
            .where(Member.username == username)
            .order_by(Member.id)
        )
        with translate_db_errors():
            result = await db.execute(query)
        return [row_to_username_only(row) for row in result.all()]

    async def find_by_native_projection(self, db: AsyncSession, page_request: PageRequest) -> Page[MemberProjection]:
        """직접 작성한 SQL로 회원 + 팀 이름을 페이지 조회합니다.

        Hand-written SQL over members left-joined with teams, ordered by
        member id, with its own count statement. The request's sort is not
        applied to this statement.
        """
        check_window(page_request.page, page_request.size)
        with translate_db_errors():
            result = await db.execute(
                _NATIVE_PROJECTION_SQL,
                {"limit": page_request.size, "offset": page_request.offset},
            )
            content: list[MemberProjection] = [row_to_member_projection(row) for row in result.all()]
            total: int = (await db.execute(_NATIVE_PROJECTION_COUNT_SQL)).scalar() or 0
        return Page.build(content, page_request, total)

    async def find_member_custom(self, db: AsyncSession) -> list[Member]:
        """커스텀 조회 경로 — 모든 회원을 id 순으로 반환합니다."""
        return await self._scalars(db, select(Member).order_by(Member.id))


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
