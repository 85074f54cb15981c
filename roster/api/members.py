"""회원 라우터 — 회원 CRUD 및 페이지 조회 엔드포인트.

Member Router — CRUD and paged listing endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roster.api.deps import bind_actor, get_page_request
from roster.database import get_db
from roster.schemas.member import MemberCreate, MemberResponse, MemberUpdate
from roster.services.member_service import member_service
from roster.utils.pagination import Page, PageRequest

router: APIRouter = APIRouter(dependencies=[Depends(bind_actor)])


@router.get("", response_model=Page[MemberResponse])
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberResponse]:
    """회원 목록을 페이지 단위로 조회합니다.

    List members, e.g. ?page=0&size=3&sort=username,desc
    """
    return await member_service.list_members(db, page_request)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 단건 조회 — Retrieve one member."""
    return await member_service.get_member(db, member_id)


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """새 회원을 생성합니다 — Create a member."""
    result: MemberResponse = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: int,
    data: MemberUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 정보를 부분 수정합니다 — Partially update a member."""
    result: MemberResponse = await member_service.update_member(db, member_id, data)
    await db.commit()
    return result


@router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """회원을 삭제합니다 — Delete a member."""
    await member_service.delete_member(db, member_id)
    await db.commit()
