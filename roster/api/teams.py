"""팀 라우터 — 팀 생성/조회/삭제 엔드포인트.

Team Router — create, read and delete endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roster.api.deps import bind_actor
from roster.database import get_db
from roster.schemas.member import TeamCreate, TeamResponse
from roster.services.team_service import team_service

router: APIRouter = APIRouter(dependencies=[Depends(bind_actor)])


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    return await team_service.get_team(db, team_id)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    data: TeamCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TeamResponse:
    """새 팀을 생성합니다 — Create a team."""
    result: TeamResponse = await team_service.create_team(db, data)
    await db.commit()
    return result


@router.delete("/{team_id}", status_code=204)
async def delete_team(
    team_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """팀을 삭제합니다. 소속 회원은 삭제되지 않습니다.

    Delete a team; its members are kept according to TEAM_DELETE_POLICY.
    """
    await team_service.delete_team(db, team_id)
    await db.commit()
