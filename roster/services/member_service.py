"""회원 서비스 — 회원 CRUD 및 페이지 조회 비즈니스 로직.

Member Service — Business logic for member CRUD and paged listing.
Resolves team references and turns entities into response schemas.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from roster.mappers.member_mapper import apply_member_update, member_from_create, to_member_response
from roster.models.member import Member
from roster.models.team import Team
from roster.repositories.member_repository import member_repository
from roster.repositories.team_repository import team_repository
from roster.schemas.member import MemberCreate, MemberResponse, MemberUpdate
from roster.utils.exceptions import NotFoundError
from roster.utils.pagination import Page, PageRequest


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스."""

    async def _resolve_team(self, db: AsyncSession, team_id: int | None) -> Team | None:
        """team_id를 팀 엔티티로 변환합니다.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        if team_id is None:
            return None
        team: Team | None = await team_repository.find_by_id(db, team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team

    async def get_member(self, db: AsyncSession, member_id: int) -> MemberResponse:
        """회원 단건 조회.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.find_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return to_member_response(member)

    async def list_members(self, db: AsyncSession, page_request: PageRequest) -> Page[MemberResponse]:
        """회원 목록을 페이지 단위로 조회합니다 — Paged member listing."""
        page: Page[Member] = await member_repository.find_page(db, page_request)
        return page.map(to_member_response, MemberResponse)

    async def create_member(self, db: AsyncSession, data: MemberCreate) -> MemberResponse:
        """새 회원을 생성합니다.

        Raises:
            NotFoundError: team_id에 해당하는 팀이 없을 때 (Unknown team)
        """
        team: Team | None = await self._resolve_team(db, data.team_id)
        member: Member = await member_repository.save(db, member_from_create(data, team))
        return to_member_response(member)

    async def update_member(self, db: AsyncSession, member_id: int, data: MemberUpdate) -> MemberResponse:
        """회원 정보를 부분 수정합니다.

        Raises:
            NotFoundError: 회원 또는 팀을 찾을 수 없을 때 (Member or team not found)
        """
        member: Member | None = await member_repository.find_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")

        team: Team | None = None
        if "team_id" in data.model_fields_set:
            team = await self._resolve_team(db, data.team_id)

        apply_member_update(member, data, team)
        member = await member_repository.save(db, member)
        return to_member_response(member)

    async def delete_member(self, db: AsyncSession, member_id: int) -> None:
        """회원을 삭제합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        deleted: bool = await member_repository.delete_by_id(db, member_id)
        if not deleted:
            raise NotFoundError("Member not found")


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
