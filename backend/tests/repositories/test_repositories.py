"""Tests for the entity repositories."""

import pytest

from ivrflow.core.exceptions import ResourceNotFoundError, VersionConflictError
from ivrflow.models import Flow, NodeType, TokenType
from ivrflow.repositories import (
    FlowRepository,
    NodeRepository,
    ProjectRepository,
    TokenRepository,
    UserRepository,
)


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_email_is_normalized(self, db_session):
        repo = UserRepository(db_session)

        user = await repo.create(name="Bo", email="  Bo@Bank.Example ", hashed_password="h")

        assert user.email == "bo@bank.example"
        assert (await repo.get_by_email("BO@bank.example")).id == user.id

    @pytest.mark.asyncio
    async def test_update_profile(self, db_session, test_user):
        repo = UserRepository(db_session)

        updated = await repo.update_profile(test_user.id, email="ANA2@bank.example")

        assert updated.email == "ana2@bank.example"


class TestProjectRepository:
    @pytest.mark.asyncio
    async def test_list_for_owner(self, db_session, test_user, other_user, project_factory):
        await project_factory(test_user, name="Mine")
        await project_factory(other_user, name="Theirs")

        projects = await ProjectRepository(db_session).list_for_owner(test_user.id)

        assert [p.name for p in projects] == ["Mine"]


class TestTokenRepository:
    @pytest.mark.asyncio
    async def test_delete_for_project(self, db_session, sample_project, sample_token):
        repo = TokenRepository(db_session)
        await repo.create(sample_project.id, "Card PIN", TokenType.PIN)

        assert await repo.delete_for_project(sample_project.id) is True
        assert await repo.list_for_project(sample_project.id) == []

    @pytest.mark.asyncio
    async def test_type_stored(self, db_session, sample_token):
        token = await TokenRepository(db_session).get(sample_token.id)

        assert token.token_type == TokenType.SSN


class TestFlowRepository:
    @pytest.mark.asyncio
    async def test_create_starts_at_version_one(self, db_session, sample_project):
        flow = await FlowRepository(db_session).create(sample_project.id, "Login")

        assert flow.version == 1

    @pytest.mark.asyncio
    async def test_bump_version(self, db_session, sample_project):
        repo = FlowRepository(db_session)
        flow = await repo.create(sample_project.id, "Login")

        bumped = await repo.bump_version(flow, name="Login v2")

        assert bumped.version == 2
        assert bumped.name == "Login v2"

    @pytest.mark.asyncio
    async def test_bump_version_of_deleted_flow(self, db_session, sample_project):
        repo = FlowRepository(db_session)
        flow = await repo.create(sample_project.id, "Login")
        ghost = Flow(id=flow.id, project_id=sample_project.id, name="x", version=1)
        await repo.delete(flow.id)

        with pytest.raises(ResourceNotFoundError):
            await repo.bump_version(ghost)

    @pytest.mark.asyncio
    async def test_bump_version_from_stale_copy(self, db_session, sample_project):
        repo = FlowRepository(db_session)
        flow = await repo.create(sample_project.id, "Login")
        await repo.bump_version(flow)
        stale = Flow(id=flow.id, project_id=sample_project.id, name="Login", version=1)

        with pytest.raises(VersionConflictError) as exc_info:
            await repo.bump_version(stale, name="Overwrite")

        assert (exc_info.value.expected, exc_info.value.actual) == (1, 2)
        current = await repo.get(flow.id)
        assert current.version == 2
        assert current.name == "Login"


class TestNodeRepository:
    @pytest.mark.asyncio
    async def test_replace_keeps_submitted_order(self, db_session, sample_project):
        flow = await FlowRepository(db_session).create(sample_project.id, "Login")
        repo = NodeRepository(db_session)
        rows = [
            {"id": "end", "node_type": NodeType.END, "title": "Bye"},
            {"id": "start", "node_type": NodeType.START, "next_node_ids": ["end"]},
        ]

        await repo.replace_for_flow(flow.id, rows)
        nodes = await repo.list_for_flow(flow.id)

        assert [n.id for n in nodes] == ["end", "start"]
        assert nodes[1].next_node_ids == ["end"]
        assert nodes[0].next_node_ids == []

    @pytest.mark.asyncio
    async def test_replace_discards_previous_set(self, db_session, sample_project):
        flow = await FlowRepository(db_session).create(sample_project.id, "Login")
        repo = NodeRepository(db_session)
        await repo.replace_for_flow(flow.id, [{"id": "a", "node_type": NodeType.START}])

        await repo.replace_for_flow(flow.id, [{"id": "b", "node_type": NodeType.START}])

        assert [n.id for n in await repo.list_for_flow(flow.id)] == ["b"]
        assert await repo.get(flow.id, "a") is None

    @pytest.mark.asyncio
    async def test_node_ids_scoped_per_flow(self, db_session, sample_project):
        flows = FlowRepository(db_session)
        first = await flows.create(sample_project.id, "Login")
        second = await flows.create(sample_project.id, "Reset PIN")
        repo = NodeRepository(db_session)

        await repo.create(first.id, id="start", node_type=NodeType.START)
        await repo.create(second.id, id="start", node_type=NodeType.START)

        assert (await repo.get(second.id, "start")).flow_id == second.id
