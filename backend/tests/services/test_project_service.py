"""Tests for ProjectService."""

import pytest

from ivrflow.repositories import FlowRepository, NodeRepository, TokenRepository
from ivrflow.schemas.flow import FlowCreate
from ivrflow.schemas.project import ProjectCreate, ProjectUpdate
from ivrflow.services.flow_service import FlowService
from ivrflow.services.project_service import ProjectService


class TestProjectService:
    @pytest.mark.asyncio
    async def test_create(self, db_session, test_user):
        project = await ProjectService(db_session).create(
            test_user, ProjectCreate(name="Bank IVR", description="Retail banking line")
        )

        assert project.user_id == test_user.id
        assert project.description == "Retail banking line"

    @pytest.mark.asyncio
    async def test_list_for_user_includes_flows(
        self, db_session, test_user, other_user, project_factory, sample_flow
    ):
        await project_factory(other_user, name="Vendor line")

        overviews = await ProjectService(db_session).list_for_user(test_user)

        assert len(overviews) == 1
        assert overviews[0].project.name == "Bank IVR"
        assert [f.name for f in overviews[0].flows] == ["Login"]

    @pytest.mark.asyncio
    async def test_get_bundle(self, db_session, sample_project, sample_flow, sample_token):
        bundle = await ProjectService(db_session).get_bundle(sample_project)

        assert [s.flow.id for s in bundle.flows] == [sample_flow.id]
        assert len(bundle.flows[0].nodes) == 1
        assert [t.id for t in bundle.tokens] == [sample_token.id]

    @pytest.mark.asyncio
    async def test_update_keeps_name_when_empty(self, db_session, sample_project):
        updated = await ProjectService(db_session).update(
            sample_project, ProjectUpdate(name="", description=None)
        )

        assert updated.name == "Bank IVR"
        assert updated.description is None

    @pytest.mark.asyncio
    async def test_update_without_description_keeps_it(self, db_session, sample_project):
        updated = await ProjectService(db_session).update(
            sample_project, ProjectUpdate(name="Bank IVR v2")
        )

        assert updated.name == "Bank IVR v2"
        assert updated.description == "Retail banking line"

    @pytest.mark.asyncio
    async def test_delete_cascades(self, db_session, sample_project, sample_flow, sample_token):
        second = await FlowService(db_session).create(
            sample_project, FlowCreate(name="Reset PIN", project_id=sample_project.id)
        )

        await ProjectService(db_session).delete(sample_project)

        service = ProjectService(db_session)
        assert await service.projects.get(sample_project.id) is None
        assert await FlowRepository(db_session).list_for_project(sample_project.id) == []
        assert await TokenRepository(db_session).get(sample_token.id) is None
        for flow_id in (sample_flow.id, second.flow.id):
            assert await NodeRepository(db_session).list_for_flow(flow_id) == []
