"""회원/팀 API 테스트.

Member and team HTTP endpoints: CRUD, paged listing with query-string sort,
actor header auditing, error status mapping.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from roster.models import Member, Team
from roster.repositories.member_repository import member_repository

URL = "/api/v1/members"
TEAM_URL = "/api/v1/teams"


@pytest.fixture
def members(db: AsyncSession):
    """회원 5명을 생성하는 헬퍼 — member1..member5, age 10."""

    async def _create() -> list[Member]:
        return [
            await member_repository.save(db, Member(username=f"member{i}", age=10))
            for i in range(1, 6)
        ]

    return _create


class TestMemberCreate:
    """회원 생성 테스트."""

    async def test_create_member(self, client: AsyncClient, team_a: Team):
        """회원 생성 성공 + 행위자 헤더 기록."""
        res = await client.post(URL, json={
            "username": "member1",
            "age": 10,
            "team_id": team_a.id,
        }, headers={"X-Actor": "alice"})
        assert res.status_code == 201
        data = res.json()
        assert data["id"] is not None
        assert data["username"] == "member1"
        assert data["team_id"] == team_a.id
        assert data["created_by"] == "alice"
        assert data["last_modified_by"] == "alice"

    async def test_create_member_without_actor(self, client: AsyncClient):
        """헤더 없이 생성 시 기본 감사자."""
        res = await client.post(URL, json={"username": "member1"})
        assert res.status_code == 201
        assert res.json()["created_by"] == "system"
        assert res.json()["age"] == 0

    async def test_create_member_negative_age(self, client: AsyncClient):
        """음수 나이는 422."""
        res = await client.post(URL, json={"username": "member1", "age": -1})
        assert res.status_code == 422

    async def test_create_member_unknown_team(self, client: AsyncClient):
        """없는 팀 지정 시 404."""
        res = await client.post(URL, json={"username": "member1", "team_id": 999})
        assert res.status_code == 404


class TestMemberRead:
    """회원 조회 테스트."""

    async def test_get_member(self, client: AsyncClient, members):
        created = await members()
        res = await client.get(f"{URL}/{created[0].id}")
        assert res.status_code == 200
        assert res.json()["username"] == "member1"

    async def test_get_nonexistent_member(self, client: AsyncClient):
        res = await client.get(f"{URL}/999")
        assert res.status_code == 404

    async def test_list_members_paged(self, client: AsyncClient, members):
        """?page=0&size=3&sort=username,desc 페이지 조회."""
        await members()
        res = await client.get(URL, params={"page": 0, "size": 3, "sort": "username,desc"})
        assert res.status_code == 200
        data = res.json()
        assert [m["username"] for m in data["content"]] == ["member5", "member4", "member3"]
        assert data["total_elements"] == 5
        assert data["total_pages"] == 2
        assert data["number"] == 0
        assert data["is_first"] is True
        assert data["has_next"] is True

    async def test_list_members_second_page(self, client: AsyncClient, members):
        await members()
        res = await client.get(URL, params={"page": 1, "size": 3, "sort": "username"})
        data = res.json()
        assert [m["username"] for m in data["content"]] == ["member4", "member5"]
        assert data["is_last"] is True
        assert data["has_previous"] is True

    async def test_list_members_empty(self, client: AsyncClient):
        data = (await client.get(URL)).json()
        assert data["content"] == []
        assert data["total_elements"] == 0
        assert data["total_pages"] == 0
        assert data["size"] == 20

    @pytest.mark.parametrize("params", [
        {"page": -1},
        {"size": 0},
        {"sort": "nickname"},
        {"sort": "username,sideways"},
    ])
    async def test_list_members_bad_paging(self, client: AsyncClient, params):
        """잘못된 페이지 인자는 400."""
        res = await client.get(URL, params=params)
        assert res.status_code == 400


class TestMemberUpdate:
    """회원 수정 테스트."""

    async def test_update_member(self, client: AsyncClient, members):
        created = await members()
        res = await client.patch(f"{URL}/{created[0].id}", json={"age": 11}, headers={"X-Actor": "bob"})
        assert res.status_code == 200
        data = res.json()
        assert data["age"] == 11
        assert data["username"] == "member1"
        assert data["created_by"] == "system"
        assert data["last_modified_by"] == "bob"

    async def test_move_and_remove_team(self, client: AsyncClient, members, team_a: Team):
        created = await members()
        res = await client.patch(f"{URL}/{created[0].id}", json={"team_id": team_a.id})
        assert res.json()["team_id"] == team_a.id

        res = await client.patch(f"{URL}/{created[0].id}", json={"team_id": None})
        assert res.json()["team_id"] is None

    async def test_update_nonexistent_member(self, client: AsyncClient):
        res = await client.patch(f"{URL}/999", json={"age": 1})
        assert res.status_code == 404


class TestMemberDelete:
    """회원 삭제 테스트."""

    async def test_delete_member(self, client: AsyncClient, members):
        created = await members()
        res = await client.delete(f"{URL}/{created[0].id}")
        assert res.status_code == 204
        assert (await client.get(f"{URL}/{created[0].id}")).status_code == 404

    async def test_delete_nonexistent_member(self, client: AsyncClient):
        res = await client.delete(f"{URL}/999")
        assert res.status_code == 404


class TestTeamApi:
    """팀 API 테스트."""

    async def test_create_and_get_team(self, client: AsyncClient):
        res = await client.post(TEAM_URL, json={"name": "teamA"}, headers={"X-Actor": "alice"})
        assert res.status_code == 201
        team_id = res.json()["id"]

        res = await client.get(f"{TEAM_URL}/{team_id}")
        assert res.status_code == 200
        assert res.json()["name"] == "teamA"
        assert res.json()["created_by"] == "alice"

    async def test_get_nonexistent_team(self, client: AsyncClient):
        assert (await client.get(f"{TEAM_URL}/999")).status_code == 404

    async def test_delete_team_detaches_members(self, client: AsyncClient, team_a: Team):
        member_id = (await client.post(URL, json={"username": "m1", "team_id": team_a.id})).json()["id"]

        res = await client.delete(f"{TEAM_URL}/{team_a.id}")
        assert res.status_code == 204

        member = (await client.get(f"{URL}/{member_id}")).json()
        assert member["team_id"] is None

    async def test_delete_nonexistent_team(self, client: AsyncClient):
        assert (await client.delete(f"{TEAM_URL}/999")).status_code == 404


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.json() == {"status": "ok"}
