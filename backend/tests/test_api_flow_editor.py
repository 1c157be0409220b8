"""Integration tests for the graph and sequential editor endpoints."""

import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def login_flow(async_client_auth, sample_flow_snapshot):
    """Sample flow holding start -> ssn -> check -> bye."""
    flow_id = sample_flow_snapshot.flow.id
    start_id = sample_flow_snapshot.nodes[0].id
    response = await async_client_auth.put(
        f"/api/v1/flows/{flow_id}",
        json={
            "nodes": [
                {"id": start_id, "type": "start", "title": "Start", "position": 0,
                 "nextNodeIds": ["ssn"]},
                {"id": "ssn", "type": "collect", "title": "Collect SSN", "position": 1,
                 "nextNodeIds": ["check"]},
                {"id": "check", "type": "validate", "title": "Check", "position": 2,
                 "nextNodeIds": ["bye"]},
                {"id": "bye", "type": "end", "title": "Goodbye", "position": 3},
            ]
        },
    )
    assert response.status_code == 200
    return {"flow_id": flow_id, "start_id": start_id, "url": f"/api/v1/flows/{flow_id}"}


class TestGraphEditor:
    @pytest.mark.asyncio
    async def test_get_graph(self, async_client_auth, login_flow):
        response = await async_client_auth.get(f"{login_flow['url']}/graph")

        assert response.status_code == 200
        graph = response.json()
        assert graph["version"] == 2
        assert len(graph["nodes"]) == 4
        assert [(e["source"], e["target"]) for e in graph["edges"]] == [
            (login_flow["start_id"], "ssn"),
            ("ssn", "check"),
            ("check", "bye"),
        ]
        assert graph["edges"][1]["id"] == "ssn-check-0"

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, async_client_auth, login_flow):
        url = f"{login_flow['url']}/connections"

        added = await async_client_auth.post(url, json={"source": "ssn", "target": "bye"})
        assert added.status_code == 200
        assert ("ssn", "bye") in [(e["source"], e["target"]) for e in added.json()["edges"]]
        assert added.json()["version"] == 3

        removed = await async_client_auth.request(
            "DELETE", url, json={"source": "ssn", "target": "bye", "version": 3}
        )
        assert removed.status_code == 200
        assert ("ssn", "bye") not in [
            (e["source"], e["target"]) for e in removed.json()["edges"]
        ]

    @pytest.mark.asyncio
    async def test_connect_unknown_node(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/connections", json={"source": "ssn", "target": "ghost"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Node 'ghost' is not part of this flow"}

    @pytest.mark.asyncio
    async def test_disconnect_missing_edge(self, async_client_auth, login_flow):
        response = await async_client_auth.request(
            "DELETE",
            f"{login_flow['url']}/connections",
            json={"source": "bye", "target": "ssn"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_stale_version(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/connections",
            json={"source": "ssn", "target": "bye", "version": 1},
        )

        assert response.status_code == 409


class TestSequenceEditor:
    @pytest.mark.asyncio
    async def test_get_sequence(self, async_client_auth, login_flow):
        response = await async_client_auth.get(f"{login_flow['url']}/sequence")

        nodes = response.json()["nodes"]
        assert [n["id"] for n in nodes][1:] == ["ssn", "check", "bye"]
        assert [n["order"] for n in nodes] == [0, 1, 2, 3]

    @pytest.mark.asyncio
    async def test_append(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/sequence", json={"type": "prompt"}
        )

        assert response.status_code == 201
        added = response.json()["nodes"][-1]
        assert added["title"] == "New prompt"
        assert added["order"] == 4
        assert added["position"] == {"x": 250.0, "y": 700.0}

    @pytest.mark.asyncio
    async def test_append_start_rejected(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/sequence", json={"type": "start"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_move(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/sequence/check/move", json={"direction": "up"}
        )

        body = response.json()
        assert body["moved"] is True
        assert [n["id"] for n in body["nodes"]][1:] == ["check", "ssn", "bye"]

    @pytest.mark.asyncio
    async def test_move_at_boundary(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/sequence/ssn/move", json={"direction": "up"}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["moved"] is False
        assert body["version"] == 2

    @pytest.mark.asyncio
    async def test_move_start_rejected(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/sequence/{login_flow['start_id']}/move",
            json={"direction": "down"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "The start node cannot be moved"}

    @pytest.mark.asyncio
    async def test_move_bad_direction(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/sequence/ssn/move", json={"direction": "left"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_move_missing_node(self, async_client_auth, login_flow):
        response = await async_client_auth.post(
            f"{login_flow['url']}/sequence/ghost/move", json={"direction": "up"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Node not found"}


class TestNodeEndpoints:
    @pytest.mark.asyncio
    async def test_get_node(self, async_client_auth, login_flow):
        response = await async_client_auth.get(f"{login_flow['url']}/nodes/ssn")

        node = response.json()["node"]
        assert node["title"] == "Collect SSN"
        assert node["flowId"] == str(login_flow["flow_id"])

    @pytest.mark.asyncio
    async def test_delete_node(self, async_client_auth, login_flow):
        response = await async_client_auth.delete(
            f"{login_flow['url']}/nodes/check", params={"version": 2}
        )

        assert response.status_code == 200
        nodes = {n["id"]: n for n in response.json()["nodes"]}
        assert "check" not in nodes
        assert nodes["ssn"]["nextNodeIds"] == []
        assert nodes["bye"]["order"] == 2

    @pytest.mark.asyncio
    async def test_delete_start_node(self, async_client_auth, login_flow):
        response = await async_client_auth.delete(
            f"{login_flow['url']}/nodes/{login_flow['start_id']}"
        )

        assert response.status_code == 400
        assert response.json() == {"error": "The start node cannot be deleted"}

    @pytest.mark.asyncio
    async def test_other_user_cannot_touch_nodes(
        self, async_client, other_auth_headers, sample_flow_snapshot
    ):
        flow_id = sample_flow_snapshot.flow.id
        start_id = sample_flow_snapshot.nodes[0].id

        response = await async_client.delete(
            f"/api/v1/flows/{flow_id}/nodes/{start_id}", headers=other_auth_headers
        )

        assert response.status_code == 403
