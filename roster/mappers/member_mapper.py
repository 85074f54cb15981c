"""회원/팀 엔티티 매퍼.

Member/team entity mapper. Converts request schemas into entities,
entities into response schemas, and raw result rows into projections
without materialising the related Team entity.
"""

from typing import Any

from sqlalchemy import Row

from roster.models.member import Member
from roster.models.team import Team
from roster.schemas.member import (
    MemberCreate,
    MemberDto,
    MemberProjection,
    MemberResponse,
    MemberTeamProjection,
    MemberUpdate,
    TeamNameProjection,
    TeamResponse,
    UsernameOnly,
)


def member_from_create(data: MemberCreate, team: Team | None = None) -> Member:
    """생성 요청으로 신규(transient) 회원을 만듭니다.

    Build a transient Member from a creation request. The caller resolves
    team_id into a Team beforehand.
    """
    return Member(username=data.username, age=data.age, team=team)


def apply_member_update(member: Member, data: MemberUpdate, team: Team | None = None) -> Member:
    """부분 수정 요청을 회원에 반영합니다.

    Apply the fields present in the request. team is only consulted when the
    request carried team_id (possibly null).
    """
    fields: set[str] = data.model_fields_set
    if "username" in fields and data.username is not None:
        member.username = data.username
    if "age" in fields and data.age is not None:
        member.age = data.age
    if "team_id" in fields:
        member.change_team(team)
    return member


def to_member_response(member: Member) -> MemberResponse:
    """회원 모델을 응답 스키마로 변환합니다 — Member to MemberResponse."""
    return MemberResponse(
        id=member.id,
        username=member.username,
        age=member.age,
        team_id=member.team_id,
        created_date=member.created_date,
        last_modified_date=member.last_modified_date,
        created_by=member.created_by,
        last_modified_by=member.last_modified_by,
    )


def to_team_response(team: Team) -> TeamResponse:
    """팀 모델을 응답 스키마로 변환합니다 — Team to TeamResponse."""
    return TeamResponse(
        id=team.id,
        name=team.name,
        created_date=team.created_date,
        last_modified_date=team.last_modified_date,
        created_by=team.created_by,
        last_modified_by=team.last_modified_by,
    )


def _mapping(row: Row[Any] | Any) -> Any:
    # Row 또는 dict 모두 허용 — accepts Row objects and plain mappings
    return row._mapping if isinstance(row, Row) else row


def row_to_member_dto(row: Row[Any]) -> MemberDto:
    """(id, username, team_name) 행을 MemberDto로 변환합니다."""
    m = _mapping(row)
    return MemberDto(id=m["id"], username=m["username"], team_name=m["team_name"])


def row_to_member_projection(row: Row[Any]) -> MemberProjection:
    """네이티브 쿼리 행을 MemberProjection으로 변환합니다."""
    m = _mapping(row)
    return MemberProjection(id=m["id"], username=m["username"], team_name=m["team_name"])


def row_to_team_projection(row: Row[Any]) -> MemberTeamProjection:
    """(username, team_name) 행을 중첩 프로젝션으로 변환합니다.

    A null team_name (member without a team) yields team=None.
    """
    m = _mapping(row)
    team_name: str | None = m["team_name"]
    return MemberTeamProjection(
        username=m["username"],
        team=TeamNameProjection(name=team_name) if team_name is not None else None,
    )


def row_to_username_only(row: Row[Any]) -> UsernameOnly:
    """(username) 행을 UsernameOnly로 변환합니다."""
    return UsernameOnly(username=_mapping(row)["username"])
