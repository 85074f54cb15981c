"""팀 레포지토리 — 팀 CRUD 및 삭제 정책.

Team Repository — CRUD for teams. Deleting a team never deletes its
members; what happens to their reference is decided by TEAM_DELETE_POLICY.
"""

import logging
from typing import Any, Literal

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.config import settings
from roster.database import translate_db_errors
from roster.models.member import Member
from roster.models.team import Team
from roster.repositories.base import BaseRepository
from roster.utils.exceptions import PersistenceError

logger = logging.getLogger(__name__)

DeletePolicy = Literal["detach", "restrict"]


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Attributes:
        delete_policy: None이면 호출 시점의 설정값 사용
                       (Policy override; None reads settings at call time)
    """

    def __init__(self, delete_policy: DeletePolicy | None = None) -> None:
        super().__init__(Team)
        self.delete_policy: DeletePolicy | None = delete_policy

    async def find_by_name(self, db: AsyncSession, name: str) -> list[Team]:
        """이름으로 팀을 조회합니다 — Teams with this name, in insertion order."""
        query: Select = select(Team).where(Team.name == name).order_by(Team.id)
        with translate_db_errors():
            result = await db.execute(query)
        return list(result.scalars().all())

    async def count_members(self, db: AsyncSession, team_id: int) -> int:
        """팀을 참조하는 회원 수 — Members referencing the team."""
        query: Select = select(func.count()).select_from(Member).where(Member.team_id == team_id)
        with translate_db_errors():
            return (await db.execute(query)).scalar() or 0

    async def delete_by_id(self, db: AsyncSession, record_id: Any) -> bool:
        """삭제 정책을 적용한 뒤 팀을 삭제합니다.

        detach: 소속 회원의 team_id를 NULL로 바꾼 후 삭제
                (members' team_id is set to NULL in the same scope, then the team is removed)
        restrict: 소속 회원이 있으면 PersistenceError
                  (refuse while any member references the team)

        Returns:
            bool: 삭제 성공 여부, 없으면 False (Whether a row was removed)

        Raises:
            PersistenceError: restrict 정책에서 소속 회원이 있을 때
        """
        team: Team | None = await self.find_by_id(db, record_id)
        if team is None:
            return False

        policy: DeletePolicy = self.delete_policy or settings.TEAM_DELETE_POLICY
        if policy == "restrict":
            referencing: int = await self.count_members(db, team.id)
            if referencing:
                raise PersistenceError(f"Team {team.id} is still referenced by {referencing} member(s)")
        else:
            # 소속 회원의 팀 참조 해제 — clear every member's team reference
            with translate_db_errors():
                await db.flush()
                loaded = await db.execute(select(Member).where(Member.team_id == team.id))
                for member in loaded.scalars().all():
                    member.team = None
                await db.flush()
            logger.info("detached members from team id=%s before delete", team.id)

        return await super().delete_by_id(db, record_id)


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
