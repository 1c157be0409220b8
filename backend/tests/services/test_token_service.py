"""Tests for TokenService."""

from uuid import uuid4

import pytest

from ivrflow.models import TokenType
from ivrflow.schemas.flow import FlowUpdate, NodeInput
from ivrflow.schemas.token import TokenCreate, TokenUpdate
from ivrflow.services.flow_service import FlowService
from ivrflow.services.token_service import TokenService


class TestTokenService:
    @pytest.mark.asyncio
    async def test_create(self, db_session, sample_project):
        token = await TokenService(db_session).create(
            sample_project,
            TokenCreate(name="Card PIN", type="PIN", project_id=sample_project.id),
        )

        assert token.project_id == sample_project.id
        assert token.token_type == TokenType.PIN
        assert token.format is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("legacy", "expected"),
        [("ACCOUNT", TokenType.ACCOUNT_NUMBER), ("CARD", TokenType.DEBIT_CARD)],
    )
    async def test_create_with_legacy_type(self, db_session, sample_project, legacy, expected):
        token = await TokenService(db_session).create(
            sample_project,
            TokenCreate(name="Legacy", type=legacy, project_id=sample_project.id),
        )

        assert token.token_type == expected

    @pytest.mark.asyncio
    async def test_list_for_project(self, db_session, sample_project, sample_token):
        tokens = await TokenService(db_session).list_for_project(sample_project.id)

        assert [t.name for t in tokens] == ["Customer SSN"]

    @pytest.mark.asyncio
    async def test_list_for_owner_pairs_tokens_with_projects(
        self, db_session, test_user, other_user, project_factory, sample_token
    ):
        card = await project_factory(test_user, name="Card IVR")
        service = TokenService(db_session)
        await service.create(card, TokenCreate(name="Card PIN", type="PIN", project_id=card.id))
        foreign = await project_factory(other_user, name="Vendor IVR")
        await service.create(
            foreign, TokenCreate(name="Vendor SSN", type="SSN", project_id=foreign.id)
        )

        listed = await service.list_for_owner(test_user.id)

        assert sorted((e.token.name, e.project.name) for e in listed) == [
            ("Card PIN", "Card IVR"),
            ("Customer SSN", "Bank IVR"),
        ]
        assert await service.list_for_owner(uuid4()) == []

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, sample_token):
        updated = await TokenService(db_session).update(
            sample_token, TokenUpdate(description="Last four only")
        )

        assert updated.description == "Last four only"
        assert updated.name == "Customer SSN"
        assert updated.format == r"^\d{3}-\d{2}-\d{4}$"

    @pytest.mark.asyncio
    async def test_update_cannot_clear_name_or_type(self, db_session, sample_token):
        updated = await TokenService(db_session).update(
            sample_token, TokenUpdate(name="", type=None, format=None)
        )

        assert updated.name == "Customer SSN"
        assert updated.token_type == TokenType.SSN
        assert updated.format is None

    @pytest.mark.asyncio
    async def test_delete_leaves_referencing_nodes(
        self, db_session, sample_flow_snapshot, sample_token
    ):
        flow_service = FlowService(db_session)
        start = sample_flow_snapshot.nodes[0]
        await flow_service.update(
            sample_flow_snapshot.flow,
            FlowUpdate(
                nodes=[
                    NodeInput(id=start.id, type="start", title="Start", next_node_ids=["ssn"]),
                    NodeInput(id="ssn", type="collect", title="SSN", token_id=str(sample_token.id)),
                ]
            ),
        )

        await TokenService(db_session).delete(sample_token)

        snapshot = await flow_service.snapshot(sample_flow_snapshot.flow)
        collect = next(node for node in snapshot.nodes if node.id == "ssn")
        assert collect.token_id == str(sample_token.id)
