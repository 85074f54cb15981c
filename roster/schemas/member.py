"""회원/팀 Pydantic 스키마 및 프로젝션 정의.

Member and team Pydantic schemas.
Request/response bodies for the HTTP surface plus the reduced-shape
projections returned by repository reads that need only a few columns.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# === 팀 (Team) 스키마 ===

class TeamCreate(BaseModel):
    """팀 생성 요청 스키마 — Team creation request."""

    name: str = Field(min_length=1, max_length=255)  # 팀 이름 (Team name)


class TeamResponse(BaseModel):
    """팀 응답 스키마 — Team response with audit columns."""

    id: int
    name: str
    created_date: datetime | None = None
    last_modified_date: datetime | None = None
    created_by: str | None = None
    last_modified_by: str | None = None


# === 회원 (Member) 스키마 ===

class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Member creation request schema.

    Attributes:
        username: 사용자명 (Username)
        age: 나이, 0 이상 (Age, non-negative)
        team_id: 소속 팀 ID (Optional team identifier)
    """

    username: str = Field(min_length=1, max_length=100)
    age: int = Field(default=0, ge=0)
    team_id: int | None = None


class MemberUpdate(BaseModel):
    """회원 수정 요청 스키마 (부분 업데이트).

    Partial update; only fields present in the request body are applied,
    so an explicit null team_id removes the member from its team.
    """

    username: str | None = Field(default=None, min_length=1, max_length=100)
    age: int | None = Field(default=None, ge=0)
    team_id: int | None = None


class MemberResponse(BaseModel):
    """회원 응답 스키마 — Member response with audit columns."""

    id: int
    username: str
    age: int
    team_id: int | None = None
    created_date: datetime | None = None
    last_modified_date: datetime | None = None
    created_by: str | None = None
    last_modified_by: str | None = None


# === 프로젝션 (Projections) ===

class MemberDto(BaseModel):
    """회원 + 팀 이름 DTO — Member id, username and team name."""

    id: int
    username: str
    team_name: str | None = None


class UsernameOnly(BaseModel):
    """사용자명만 담는 프로젝션 — Username-only projection."""

    username: str


class TeamNameProjection(BaseModel):
    """팀 이름만 담는 중첩 프로젝션 — Nested team projection."""

    name: str


class MemberTeamProjection(BaseModel):
    """사용자명 + 팀 이름 중첩 프로젝션.

    Nested closed projection: the member's username and its team's name,
    read from the joined row without loading the Team entity.
    """

    username: str
    team: TeamNameProjection | None = None


class MemberProjection(BaseModel):
    """네이티브 쿼리 결과 프로젝션 — Row shape of the hand-written SQL read."""

    id: int
    username: str
    team_name: str | None = None
