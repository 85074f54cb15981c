"""엔티티 매퍼 테스트.

Entity mapper: request schemas to entities, entities to responses, and raw
rows to projections.
"""

from roster.mappers.member_mapper import (
    apply_member_update,
    member_from_create,
    row_to_member_dto,
    row_to_member_projection,
    row_to_team_projection,
    row_to_username_only,
    to_member_response,
)
from roster.models import Member, Team
from roster.schemas.member import MemberCreate, MemberUpdate


class TestRequestMapping:
    """요청 → 엔티티."""

    def test_member_from_create(self):
        team = Team(name="teamA")
        member = member_from_create(MemberCreate(username="member1", age=10, team_id=7), team)
        assert member.id is None
        assert (member.username, member.age) == ("member1", 10)
        assert member.team is team

    def test_partial_update_applies_present_fields_only(self):
        team = Team(name="teamA")
        member = Member(username="member1", age=10, team=team)
        apply_member_update(member, MemberUpdate(age=11))
        assert (member.username, member.age) == ("member1", 11)
        assert member.team is team

    def test_explicit_null_team_detaches(self):
        member = Member(username="member1", age=10, team=Team(name="teamA"))
        apply_member_update(member, MemberUpdate(team_id=None))
        assert member.team is None


class TestResponseMapping:
    """엔티티 → 응답."""

    def test_to_member_response(self):
        member = Member(username="member1", age=10)
        member.id = 3
        member.created_by = "alice"
        response = to_member_response(member)
        assert response.id == 3
        assert response.username == "member1"
        assert response.team_id is None
        assert response.created_by == "alice"


class TestRowMapping:
    """행 → 프로젝션."""

    def test_member_dto(self):
        dto = row_to_member_dto({"id": 1, "username": "m1", "team_name": "teamA"})
        assert (dto.id, dto.username, dto.team_name) == (1, "m1", "teamA")

    def test_member_projection_without_team(self):
        projection = row_to_member_projection({"id": 2, "username": "m2", "team_name": None})
        assert projection.team_name is None

    def test_nested_projection(self):
        projection = row_to_team_projection({"username": "m1", "team_name": "teamA"})
        assert projection.username == "m1"
        assert projection.team.name == "teamA"

    def test_nested_projection_without_team(self):
        assert row_to_team_projection({"username": "m1", "team_name": None}).team is None

    def test_username_only(self):
        assert row_to_username_only({"username": "m1"}).username == "m1"
