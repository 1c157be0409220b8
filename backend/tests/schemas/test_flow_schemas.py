"""Tests for flow, node and token schemas."""

import pytest
from pydantic import ValidationError

from ivrflow.schemas.flow import FlowUpdate, MoveRequest, NodeInput, Position
from ivrflow.schemas.token import TokenCreate


class TestNodeInput:
    def test_accepts_camel_case(self):
        node = NodeInput.model_validate(
            {"type": "collect", "nextNodeIds": ["b"], "tokenId": "t1", "validationRules": {"len": 4}}
        )

        assert node.next_node_ids == ["b"]
        assert node.token_id == "t1"
        assert node.validation_rules == {"len": 4}

    def test_position_object_or_ordinal(self):
        assert isinstance(NodeInput(type="end", position={"x": 1, "y": 2}).position, Position)
        assert NodeInput(type="end", position=3).position == 3

    def test_negative_ordinal_rejected(self):
        with pytest.raises(ValidationError):
            NodeInput(type="end", position=-1)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            NodeInput(type="menu")


class TestFlowUpdate:
    def test_nodes_omitted_is_none(self):
        assert FlowUpdate(name="Login").nodes is None

    def test_empty_node_list_kept(self):
        assert FlowUpdate(nodes=[]).nodes == []

    def test_version_must_be_positive(self):
        with pytest.raises(ValidationError):
            FlowUpdate(version=0)


class TestEditorRequests:
    def test_move_direction(self):
        assert MoveRequest(direction="down").direction == "down"
        with pytest.raises(ValidationError):
            MoveRequest(direction="sideways")


class TestTokenCreate:
    def test_legacy_type_normalized(self):
        token = TokenCreate(
            name="Card", type="CARD", projectId="00000000-0000-4000-8000-000000000000"
        )

        assert token.type == "DEBIT_CARD"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            TokenCreate(name="", type="PIN", project_id="00000000-0000-4000-8000-000000000000")
