"""팀 서비스 — 팀 생성/조회/삭제.

Team Service — Business logic for team creation, lookup and deletion.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from roster.mappers.member_mapper import to_team_response
from roster.models.team import Team
from roster.repositories.team_repository import team_repository
from roster.schemas.member import TeamCreate, TeamResponse
from roster.utils.exceptions import NotFoundError


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스."""

    async def get_team(self, db: AsyncSession, team_id: int) -> TeamResponse:
        team: Team | None = await team_repository.find_by_id(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return to_team_response(team)

    async def create_team(self, db: AsyncSession, data: TeamCreate) -> TeamResponse:
        team: Team = await team_repository.save(db, Team(name=data.name))
        return to_team_response(team)

    async def delete_team(self, db: AsyncSession, team_id: int) -> None:
        """팀을 삭제합니다. 소속 회원 처리는 TEAM_DELETE_POLICY를 따릅니다.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
            PersistenceError: restrict 정책에서 소속 회원이 있을 때
        """
        deleted: bool = await team_repository.delete_by_id(db, team_id)
        if not deleted:
            raise NotFoundError("Team not found")


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
